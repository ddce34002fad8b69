# =============================================================================
# main.py  —  Entry Point for the Munich Mensa Assistant
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#
# WHAT HAPPENS:
#   1. Loads .env (OPENROUTER_API_KEY, MENSA_* settings)
#   2. Creates the agent (mensa_agent/assistant.py), which starts the MCP
#      tool server as a subprocess
#   3. For every question, prints each tool call, the canteen data the tool
#      returned (mensa_agent/console.py), and the agent's final answer
#
# To use the tools from another MCP client instead (Claude Desktop, an IDE),
# run the server on its own:  uv run python -m mensa_tools.mcp_server
# =============================================================================

import asyncio

from dotenv import load_dotenv

# LiteLlm reads provider API keys from the environment on first use.
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from mensa.config import Settings, get_settings
from mensa_agent.assistant import create_agent
from mensa_agent.console import render_tool_result

QUIT_WORDS = ("quit", "exit", "q")


async def ask(runner: Runner, settings: Settings, session_id: str, question: str) -> str:
    """Send one question and stream tool activity; return the final answer."""
    message = types.Content(role="user", parts=[types.Part(text=question)])
    answer = ""

    async for event in runner.run_async(
        user_id=settings.agent_user_id,
        session_id=session_id,
        new_message=message,
    ):
        if not (event.content and event.content.parts):
            continue
        for part in event.content.parts:
            if part.function_call:
                args = ", ".join(f"{k}={v!r}" for k, v in (part.function_call.args or {}).items())
                print(f"  🔧 {part.function_call.name}({args})")
            if part.function_response:
                for line in render_tool_result(part.function_response.name, part.function_response.response):
                    print(f"  {line}")
            if part.text:
                answer = part.text

    return answer


async def chat(settings: Settings) -> None:
    """Interactive loop: one ADK session per program run."""
    agent = create_agent(settings)
    session_service = InMemorySessionService()
    runner = Runner(agent=agent, app_name=settings.agent_app_name, session_service=session_service)
    session = await session_service.create_session(
        app_name=settings.agent_app_name,
        user_id=settings.agent_user_id,
    )

    print(f"🍽  Munich Mensa Assistant ({settings.agent_model})")
    print("   Ask e.g. \"Vegan lunch in Garching today?\"  ('quit' to exit)")

    while True:
        try:
            question = input("\n🧑 You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if question.lower() in QUIT_WORDS:
            break
        if not question:
            continue

        answer = await ask(runner, settings, session.id, question)
        print(f"\n🤖 {answer}" if answer else "\n⚠️  No response generated.")

    print("👋 Guten Appetit!")


if __name__ == "__main__":
    asyncio.run(chat(get_settings()))
