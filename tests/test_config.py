from curiosity import config


def test_defaults_without_config_file():
    assert config.llm_base_url() == "http://localhost:1234/v1"
    assert config.llm_model_name() == "llama-3.2-1b-instruct"
    assert config.llm_temperature() == 0.7
    assert config.llm_api_key() == ""
    assert config.llm_strip_reasoning() is False
    assert config.llm_tool_role() == "user"
    assert config.conversation_system_prompt() is None
    assert config.conversation_max_tool_rounds() == 5
    assert config.log_level() == "WARNING"


def test_overrides(write_config):
    write_config(
        {
            "llm": {
                "base_url": "https://api.openai.com/v1",
                "model_name": "gpt-4o-mini",
                "temperature": 0.2,
                "api_key": "sk-test",
                "strip_reasoning": True,
                "tool_role": "Tool",
            },
            "conversation": {"system_prompt": "  Hello  ", "max_tool_rounds": 2},
            "logging": {"level": "debug"},
        }
    )

    assert config.llm_base_url() == "https://api.openai.com/v1"
    assert config.llm_model_name() == "gpt-4o-mini"
    assert config.llm_temperature() == 0.2
    assert config.llm_api_key() == "sk-test"
    assert config.llm_strip_reasoning() is True
    assert config.llm_tool_role() == "tool"
    assert config.conversation_system_prompt() == "Hello"
    assert config.conversation_max_tool_rounds() == 2
    assert config.log_level() == "DEBUG"


def test_bad_values_fall_back(write_config):
    write_config(
        {
            "llm": {"base_url": "  ", "temperature": "hot", "tool_role": "narrator"},
            "conversation": {"max_tool_rounds": -3},
        }
    )

    assert config.llm_base_url() is None
    assert config.llm_temperature() == 0.7
    assert config.llm_tool_role() == "user"
    assert config.conversation_max_tool_rounds() == 0


def test_unreadable_config_is_ignored(isolated_config):
    (isolated_config / "curiosity.json").write_text("{broken", encoding="utf-8")
    config.load_config.cache_clear()
    assert config.load_config() == {}
    assert config.llm_model_name() == "llama-3.2-1b-instruct"


def test_api_key_from_environment(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    assert config.llm_api_key() == "sk-env"
