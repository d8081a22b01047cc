"""Default configuration values.

This module defines the built-in default configuration values that are used
when no other configuration sources provide values. The paths match the
container image the gateway ships in.
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "logging": {
        "level": "info",
        "format": "json",
        "file": "",
    },
    "gateway": {
        "executable": "openclaw",
        "host": "127.0.0.1",
        "port": 18789,
        "bind": "lan",
        "token": "",
        "config_dir": "/root/.openclaw",
        "workspace_dir": "/root/clawd",
        "shutdown_timeout": 10.0,
        "extra_args": ["--verbose", "--allow-unconfigured"],
    },
    "supervisor": {
        "max_retries": 10,
        "initial_backoff_seconds": 5,
        "max_backoff_seconds": 120,
        "success_threshold_seconds": 60,
    },
    "backup": {
        "local_dir": "/root/.openclaw",
        "mount_root": "/data/moltbot",
        "remote_dir": "/data/moltbot/openclaw-backup",
        "timestamp_file": ".last-sync",
        "interval": 60.0,
        "push_timeout": 60.0,
        "restore_timeout": 30.0,
        "exclude": ["*.lock"],
    },
    "health": {
        "enabled": True,
        "host": "0.0.0.0",  # noqa: S104
        "port": 8080,
        "probe_timeout": 5.0,
        "resource_probe": True,
    },
    "schedule": {
        "readiness_attempts": 30,
        "readiness_interval": 2.0,
        "restore_script": "/root/clawd/clawd-memory/scripts/restore-crons.js",
        "restore_timeout": 60.0,
        "study_job_name": "auto-study",
        "study_cron": "0 */6 * * *",
    },
    "study": {
        "topics_file": "/root/clawd/clawd-memory/study-topics.json",
        "state_file": "/root/clawd/.study-state.json",
        "results_per_query": 5,
        "fetch_content": True,
        "fetch_limit": 3,
        "max_content_chars": 2000,
        "query_timeout": 30.0,
        "report_timezone": "Asia/Seoul",
    },
}
