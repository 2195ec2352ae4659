from time import sleep

import corpusgen
from corpusgen import config
from corpusgen.utils import profiler

DEFAULT_COUNT = 1_000


def test_get_settings_defaults(monkeypatch):
    for name in ("GENERATE_COUNT", "GENERATE_SEED", "GENERATE_MAX_SECONDS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    settings = config.Settings(_env_file=None)
    assert settings.log_level == "INFO"
    assert settings.log_json is False
    assert settings.generate_count == DEFAULT_COUNT
    assert settings.generate_seed is None
    assert settings.generate_max_seconds is None
    assert settings.generate_flush_every > 0


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("GENERATE_SEED", "17")
    monkeypatch.setenv("GENERATE_COUNT", "5")
    settings = config.Settings(_env_file=None)
    assert settings.generate_seed == 17
    assert settings.generate_count == 5


def test_get_settings_is_cached():
    assert config.get_settings() is config.get_settings()


def test_profile_block_measures_time():
    with profiler.profile_block("sleep") as stats:
        sleep(0.05)
    assert stats.duration_seconds >= 0.05
    assert stats.peak_rss_bytes is None or stats.peak_rss_bytes > 0
    if stats.cpu_percent is not None:
        assert isinstance(stats.cpu_percent, float)


def test_profile_block_tracemalloc_peak():
    with profiler.profile_block("alloc", enable_tracemalloc=True) as stats:
        data = [bytes(1024) for _ in range(100)]
    assert data
    assert stats.peak_traced_bytes is not None and stats.peak_traced_bytes > 0


def test_public_api_exports():
    for name in ("Generator", "compile_template", "resolve_range", "run_generation", "ConfigError"):
        assert name in corpusgen.__all__
        assert hasattr(corpusgen, name)
