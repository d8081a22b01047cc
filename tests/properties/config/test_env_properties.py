from hypothesis import given, strategies as st

from gatewarden.config import parse_env_vars, parse_string_value

identifiers = st.from_regex(r"[a-z][a-z0-9]{0,11}(_[a-z0-9]{1,6})?", fullmatch=True)


@given(number=st.integers())
def test_integers_round_trip(number: int) -> None:
    assert parse_string_value(str(number)) == number


@given(flag=st.booleans(), upper=st.booleans())
def test_booleans_are_case_insensitive(flag: bool, upper: bool) -> None:  # noqa: FBT001
    text = str(flag).upper() if upper else str(flag).lower()

    assert parse_string_value(text) is flag


@given(section=identifiers, key=identifiers, number=st.integers(min_value=0, max_value=10**6))
def test_env_vars_nest_by_double_underscore(section: str, key: str, number: int) -> None:
    if section.upper() in {"CONFIG", "DEBUG"}:
        return
    environ = {f"GATEWARDEN_{section.upper()}__{key.upper()}": str(number)}

    assert parse_env_vars(environ) == {section: {key: number}}
