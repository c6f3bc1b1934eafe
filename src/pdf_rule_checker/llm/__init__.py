"""
LLM Client -- async wrapper over an OpenAI-compatible chat-completion endpoint.

Usage:
    from .llm import create_client

    client = create_client(settings)
    response = await client.call(prompt="...", temperature=0.2, max_tokens=1000)
    print(response.content)
"""

from .client import LLMClient, LLMResponse, TokenUsage, create_client
