"""Tests for config.llm_config — LLMConfig model, merge, and serialization."""

import pytest

from config.llm_config import LLMConfig


# ── Construction & defaults ───────────────────────────────────


def test_default_all_none():
    cfg = LLMConfig()
    assert cfg.model is None
    assert cfg.temperature is None
    assert cfg.max_tokens is None
    assert cfg.response_format is None


def test_validation_temperature_range():
    with pytest.raises(ValueError):
        LLMConfig(temperature=3.0)  # max 2.0


def test_validation_top_p_range():
    with pytest.raises(ValueError):
        LLMConfig(top_p=-0.1)


# ── merge ─────────────────────────────────────────────────────


def test_merge_override_non_none():
    base = LLMConfig(model="openai/gpt-4-0613", temperature=0.7, max_tokens=1000)
    merged = base.merge(LLMConfig(temperature=0.3))

    assert merged.model == "openai/gpt-4-0613"   # kept from base
    assert merged.temperature == 0.3              # overridden
    assert merged.max_tokens == 1000              # kept from base


def test_merge_does_not_mutate():
    base = LLMConfig(temperature=0.7)
    override = LLMConfig(temperature=0.2)
    base.merge(override)

    assert base.temperature == 0.7
    assert override.temperature == 0.2


def test_merge_empty_override():
    base = LLMConfig(model="a", temperature=0.5)
    merged = base.merge(LLMConfig())
    assert merged.model == "a"
    assert merged.temperature == 0.5


# ── to_litellm_kwargs ────────────────────────────────────────


def test_to_litellm_kwargs_excludes_model_and_none():
    kw = LLMConfig(model="openai/gpt-4o", max_tokens=400, temperature=0.3).to_litellm_kwargs()
    assert kw == {"max_tokens": 400, "temperature": 0.3}


def test_to_litellm_kwargs_response_format():
    kw = LLMConfig(response_format="json_object").to_litellm_kwargs()
    assert kw["response_format"] == {"type": "json_object"}


def test_to_litellm_kwargs_empty():
    assert LLMConfig().to_litellm_kwargs() == {}


# ── Agent-level configs ───────────────────────────────────────


def test_agent_configs():
    from agents.block_agent import CREATE_LLM_CONFIG, PAGE_LLM_CONFIG
    from agents.indy_agent import INDY_LLM_CONFIG

    assert INDY_LLM_CONFIG.to_litellm_kwargs() == {"temperature": 0.7, "max_tokens": 1000}
    assert CREATE_LLM_CONFIG.max_tokens == 400
    assert PAGE_LLM_CONFIG.max_tokens == 2000


# ── Settings integration ──────────────────────────────────────


def test_settings_get_default_llm_config():
    from config.settings import Settings

    s = Settings(default_model="openai/gpt-4o", max_tokens=2048, temperature=0.6)
    cfg = s.get_default_llm_config()

    assert isinstance(cfg, LLMConfig)
    assert cfg.model == "openai/gpt-4o"
    assert cfg.max_tokens == 2048
    assert cfg.temperature == 0.6
    assert cfg.seed is None


def test_settings_defaults():
    from config.settings import Settings

    s = Settings(openai_api_key="")
    assert s.indy_model == "openai/gpt-4-0613"
    assert s.llm_request_timeout == 30.0
    assert s.service_port == 3001
    assert not s.is_openai_configured
