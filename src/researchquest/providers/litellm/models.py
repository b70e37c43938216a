# src/researchquest/providers/litellm/models.py
"""Chat model constants for the LiteLLM provider.

Any valid LiteLLM model string works; these exist for IDE autocomplete.

Example:
    from researchquest.providers.litellm import ChatModels, LiteLLMClient

    client = LiteLLMClient(model=ChatModels.CLAUDE_HAIKU_45)
    client = LiteLLMClient(model="ollama/llama3.2")
"""


class ChatModels:
    """Chat models suited to question generation and evaluation."""

    # OpenAI
    GPT_4O_MINI = "openai/gpt-4o-mini"
    GPT_4O = "openai/gpt-4o"
    GPT_5_MINI = "openai/gpt-5-mini"

    # Anthropic
    CLAUDE_SONNET_45 = "anthropic/claude-sonnet-4-5-20250929"
    CLAUDE_HAIKU_45 = "anthropic/claude-haiku-4-5-20251001"

    # Google Gemini
    GEMINI_3_FLASH = "gemini/gemini-3-flash-preview"

    # Local
    OLLAMA_LLAMA_32 = "ollama/llama3.2"


DEFAULT_CHAT_MODEL = ChatModels.GPT_4O_MINI
