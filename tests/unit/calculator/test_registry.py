"""Tests for calculator selection and configuration."""

import threading

import pytest
from structlog.testing import capture_logs

from bignum.calculator import (
    NativeCalculator,
    PythonIntCalculator,
    create_calculator,
    get_calculator,
    set_calculator,
)
from bignum.config import CALCULATOR_ENV_VAR, DEFAULT_CONFIG, BignumConfig
from bignum.errors import InvalidArgumentError


@pytest.fixture(autouse=True)
def reset_calculator():
    """Every test starts and ends with no calculator installed."""
    set_calculator(None)
    yield
    set_calculator(None)


class TestBignumConfig:
    """Tests for BignumConfig."""

    def test_default_is_native(self):
        """The built-in default backend is native."""
        assert DEFAULT_CONFIG.calculator == "native"

    def test_from_env_default(self, monkeypatch):
        """With the variable unset, from_env() uses the default."""
        monkeypatch.delenv(CALCULATOR_ENV_VAR, raising=False)
        assert BignumConfig.from_env().calculator == "native"

    def test_from_env_normalizes(self, monkeypatch):
        """The variable is trimmed and lowercased."""
        monkeypatch.setenv(CALCULATOR_ENV_VAR, "  Python ")
        assert BignumConfig.from_env().calculator == "python"

    def test_from_env_blank_falls_back(self, monkeypatch):
        """A blank variable falls back to the default."""
        monkeypatch.setenv(CALCULATOR_ENV_VAR, "   ")
        assert BignumConfig.from_env().calculator == "native"

    def test_frozen(self):
        """The config is immutable."""
        config = BignumConfig()
        with pytest.raises(AttributeError):
            config.calculator = "python"  # type: ignore[misc]


class TestCreateCalculator:
    """Tests for create_calculator()."""

    def test_known_names(self):
        """Each known name builds its backend."""
        assert isinstance(create_calculator("native"), NativeCalculator)
        assert isinstance(create_calculator("python"), PythonIntCalculator)

    def test_unknown_name(self):
        """An unknown name is rejected and named in the error."""
        with pytest.raises(InvalidArgumentError, match="gmp"):
            create_calculator("gmp")


class TestGetCalculator:
    """Tests for the lazily-initialised process-wide calculator."""

    def test_resolved_from_env(self, monkeypatch):
        """The first call builds the backend named in the environment."""
        monkeypatch.setenv(CALCULATOR_ENV_VAR, "python")
        assert isinstance(get_calculator(), PythonIntCalculator)

    def test_same_instance_on_every_call(self, monkeypatch):
        """Later calls return the cached instance."""
        monkeypatch.delenv(CALCULATOR_ENV_VAR, raising=False)
        assert get_calculator() is get_calculator()

    def test_invalid_env_raises(self, monkeypatch):
        """An unknown backend in the environment raises on first use."""
        monkeypatch.setenv(CALCULATOR_ENV_VAR, "abacus")
        with pytest.raises(InvalidArgumentError):
            get_calculator()

    def test_selection_is_logged(self, monkeypatch):
        """Selection is logged once, on first resolution."""
        monkeypatch.delenv(CALCULATOR_ENV_VAR, raising=False)
        with capture_logs() as logs:
            get_calculator()
            get_calculator()

        selected = [entry for entry in logs if entry["event"] == "calculator_selected"]
        assert selected == [{"event": "calculator_selected", "backend": "native", "source": "config", "log_level": "info"}]

    def test_concurrent_first_use_has_single_winner(self, monkeypatch):
        """Threads racing on first use all get the same instance."""
        monkeypatch.delenv(CALCULATOR_ENV_VAR, raising=False)
        results = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            results.append(get_calculator())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 8
        assert all(calc is results[0] for calc in results)


class TestSetCalculator:
    """Tests for set_calculator()."""

    def test_explicit_instance_wins(self, monkeypatch):
        """An installed instance overrides the environment."""
        monkeypatch.setenv(CALCULATOR_ENV_VAR, "python")
        native = NativeCalculator()
        set_calculator(native)
        assert get_calculator() is native

    def test_reset_resolves_again(self, monkeypatch):
        """Resetting makes the next call read the environment again."""
        set_calculator(NativeCalculator())
        monkeypatch.setenv(CALCULATOR_ENV_VAR, "python")
        set_calculator(None)
        assert isinstance(get_calculator(), PythonIntCalculator)

    def test_explicit_selection_is_logged(self):
        """Installing an instance logs its source as explicit."""
        with capture_logs() as logs:
            set_calculator(PythonIntCalculator())

        assert {"event": "calculator_selected", "backend": "python", "source": "explicit", "log_level": "info"} in logs
