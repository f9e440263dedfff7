from time import sleep

import pytest

from serialbench import config
from serialbench.codecs import JsonCodec, ProtobufCodec, XmlCodec, available_codecs, resolve_codec
from serialbench.config import Settings
from serialbench.domain import build_sample_dataset
from serialbench.utils import profiler


def test_get_settings_defaults(clean_settings):
    settings = config.get_settings()
    assert settings.output_dir == "."
    assert settings.schema_name == "Employees"
    assert settings.log_level == "INFO"
    assert settings.benchmark_runs == 1
    assert settings.benchmark_warmup is False
    assert settings.persist_results is False
    assert settings.json_indent == 2


def test_settings_read_env_aliases(clean_settings, monkeypatch):
    monkeypatch.setenv("BENCHMARK_RUNS", "4")
    monkeypatch.setenv("OUTPUT_DIR", "out")
    settings = Settings()
    assert settings.benchmark_runs == 4
    assert settings.output_dir == "out"


def test_profile_block_measures_time():
    with profiler.profile_block("sleep") as stats:
        sleep(0.05)
    assert stats.duration_seconds >= 0.05
    assert stats.rss_bytes is not None and stats.rss_bytes > 0
    assert stats.peak_traced_bytes is None


def test_profile_block_traces_allocations():
    with profiler.profile_block("alloc", enable_tracemalloc=True) as stats:
        blob = [bytes(1024) for _ in range(100)]
    assert len(blob) == 100
    assert stats.peak_traced_bytes is not None
    assert stats.peak_traced_bytes >= 100 * 1024


def test_available_codecs_in_execution_order():
    assert available_codecs() == ["json", "xml", "protobuf"]


def test_resolve_codec_returns_concrete_codecs(employee_schema):
    assert isinstance(resolve_codec("json"), JsonCodec)
    assert isinstance(resolve_codec("xml"), XmlCodec)
    codec = resolve_codec("protobuf", employee_schema)
    assert isinstance(codec, ProtobufCodec)
    assert codec.schema is employee_schema


def test_resolve_codec_rejects_unknown_name():
    with pytest.raises(ValueError, match="Unknown codec 'yaml'"):
        resolve_codec("yaml")


def test_sample_dataset_is_fixed():
    dataset = build_sample_dataset()
    assert [e.id for e in dataset.employee] == [1, 2, 3]
    assert [e.name for e in dataset.employee] == ["Ali", "Kamal", "Amal"]
    assert dataset.employee[2].skills == ["Java", "Spring Boot", "Kubernetes", "gRPC"]
    assert dataset.employee[2].is_active is False
    assert build_sample_dataset() == dataset


def test_settings_accept_field_names(test_settings):
    assert test_settings.log_level == "DEBUG"
    assert test_settings.benchmark_runs == 1
