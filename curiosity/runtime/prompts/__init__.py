from .system_prompt import TOOL_USAGE_SECTION, build_system_prompt

__all__ = ["TOOL_USAGE_SECTION", "build_system_prompt"]
