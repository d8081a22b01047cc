from gatewarden.supervisor import ExponentialBackoff


class TestExponentialBackoff:
    def test_advance_doubles_until_cap(self) -> None:
        backoff = ExponentialBackoff(base=5, max_delay=120)
        delays = [backoff.base]
        for _ in range(6):
            delays.append(backoff.advance(delays[-1]))

        assert delays == [5, 10, 20, 40, 80, 120, 120]

    def test_custom_multiplier(self) -> None:
        backoff = ExponentialBackoff(base=1, max_delay=50, multiplier=3)

        assert backoff.advance(9) == 27
        assert backoff.advance(27) == 50

    def test_zero_base_stays_zero(self) -> None:
        backoff = ExponentialBackoff(base=0, max_delay=0)

        assert backoff.advance(0) == 0
