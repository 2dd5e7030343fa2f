import pytest

from pingherd.models import RunConfiguration


# Each fake probe cats its "target", which is a fixture file of ping output
CAT_TEMPLATE = "cat {target}"


@pytest.fixture
def cat_template():
    return CAT_TEMPLATE


@pytest.fixture
def ping_output(tmp_path):
    """Write ping-style output to a file and return its path as the target."""

    def _write(name: str, lines: list[str]) -> str:
        path = tmp_path / name
        path.write_text("".join(line + "\n" for line in lines))
        return str(path)

    return _write


@pytest.fixture
def run_config():
    def _make(targets, count=3, timeout=10):
        return RunConfiguration(targets=targets, count=count, timeout=timeout)

    return _make


@pytest.fixture
def scenario_lines():
    """Well-formed BSD-style output for three echoes with 1.0/2.0/3.0 ms."""

    def _lines(host: str = "10.0.0.1") -> list[str]:
        return [
            f"PING {host} ({host}): 56 data bytes",
            f"64 bytes from {host}: icmp_seq=0 ttl=64 time=1.0 ms",
            f"64 bytes from {host}: icmp_seq=1 ttl=64 time=2.0 ms",
            f"64 bytes from {host}: icmp_seq=2 ttl=64 time=3.0 ms",
            "",
            f"--- {host} ping statistics ---",
            "3 packets transmitted, 3 packets received, 0% packet loss",
            "round-trip min/avg/max/stddev = 1.0/2.0/3.0/0.8 ms",
        ]

    return _lines
