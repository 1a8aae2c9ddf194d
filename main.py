# =============================================================================
# main.py  —  Interactive Console for the Metrics Analyst Agent
# =============================================================================
#
# HOW TO RUN:
#   python main.py            (or the genai-metrics-agent console script)
#
# WHAT HAPPENS:
#   1. Loads .env and reads the backend URLs (core/config.py)
#   2. Creates the ADK agent, which spawns the metrics MCP server over stdio
#   3. Reads questions from the terminal and streams the agent's events,
#      printing each tool call and the final answer
# =============================================================================

import asyncio
import sys

from dotenv import load_dotenv

# Must run before the config is read and before LiteLlm looks up API keys.
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.metrics_agent import create_agent
from core.config import load_config
from core.errors import ConfigError


APP_NAME = "genai_metrics"
USER_ID = "operator"


async def run_agent():
    """Run the metrics analyst agent interactively."""
    try:
        config = load_config()
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return

    print("=" * 70)
    print("  GENAI METRICS ANALYST")
    print(f"  Prometheus: {config.prometheus_url}   Model: {config.agent_model}")
    print("=" * 70)

    agent = create_agent(config)
    session_service = InMemorySessionService()
    runner = Runner(agent=agent, app_name=APP_NAME, session_service=session_service)
    session = await session_service.create_session(app_name=APP_NAME, user_id=USER_ID)

    print("Ask about latency, throughput, memory, GPU or model health.")
    print("(Type 'quit' to exit)\n")

    while True:
        try:
            user_input = input("\nYou: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye!")
            break

        if user_input.lower() in ("quit", "exit", "q"):
            print("Goodbye!")
            break
        if not user_input:
            continue

        user_message = types.Content(role="user", parts=[types.Part(text=user_input)])
        final_response = ""

        async for event in runner.run_async(
            user_id=USER_ID,
            session_id=session.id,
            new_message=user_message,
        ):
            if not (event.content and event.content.parts):
                continue
            for part in event.content.parts:
                if getattr(part, "text", None):
                    final_response = part.text
                if getattr(part, "function_call", None):
                    print(f"  🔧 Calling tool: {part.function_call.name}")

        print("-" * 70)
        if final_response:
            print(f"\nAgent:\n\n{final_response}")
        else:
            print("\n⚠️  No response generated.")


def main():
    asyncio.run(run_agent())


if __name__ == "__main__":
    main()
