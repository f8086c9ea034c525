# =============================================================================
# main.py  —  Entry Point for the Documentation Assistant Agent
# =============================================================================
#
# HOW TO RUN:
#   python main.py
#
# WHAT HAPPENS:
#   1. Creates the Google ADK agent (agent/docs_agent.py), which spawns the
#      MCP server (tools/mcp_server.py) over stdio
#   2. Sets up an in-memory session
#   3. Sends each question to the agent and prints the tool calls it makes
#   4. Prints the final answer, then the topics it was built from
#
# To run only the MCP server (for another MCP client), use:
#   python -m tools.mcp_server
# =============================================================================

import asyncio

from dotenv import load_dotenv

# Load OPENROUTER_API_KEY and DXD_* settings before the agent is built;
# the spawned MCP server inherits them.
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.docs_agent import create_agent
from agent.sources import SourceCollector, tool_text
from core.content_service import is_error

APP_NAME = "dxd_docs_assistant"
USER_ID = "demo_user"


async def run_agent():
    """Run the documentation assistant interactively."""
    print("=" * 70)
    print("  DOCUMENTATION ASSISTANT")
    print("  Powered by Google ADK + FastMCP + DXD Content Service")
    print("=" * 70)
    print("\n🔧 Initializing agent...")
    agent = create_agent()

    session_service = InMemorySessionService()
    runner = Runner(
        agent=agent,
        app_name=APP_NAME,
        session_service=session_service,
    )
    session = await session_service.create_session(app_name=APP_NAME, user_id=USER_ID)

    print("✅ Agent initialized and ready!\n")
    print("💬 Ask a question about the documentation.")
    print("   (Type 'quit' to exit)\n")
    print("-" * 70)

    while True:
        try:
            user_input = input("\n🧑 You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\n\n👋 Goodbye!")
            break

        if user_input.lower() in ("quit", "exit", "q"):
            print("\n👋 Goodbye!")
            break

        if not user_input:
            continue

        user_message = types.Content(
            role="user",
            parts=[types.Part(text=user_input)],
        )

        print("\n🤖 Agent is thinking...\n")
        print("-" * 70)

        final_response = ""
        collector = SourceCollector()
        async for event in runner.run_async(
            user_id=USER_ID,
            session_id=session.id,
            new_message=user_message,
        ):
            if event.content and event.content.parts:
                for part in event.content.parts:
                    if getattr(part, "text", None):
                        final_response = part.text

                    if getattr(part, "function_call", None):
                        call = part.function_call
                        print(f"  🔧 Calling tool: {call.name}({dict(call.args or {})})")

                    if getattr(part, "function_response", None):
                        reply = part.function_response
                        text = tool_text(reply.response)
                        if text and is_error(text):
                            print(f"  ⚠️  {reply.name} failed: {text}")
                        collector.add(reply.name, reply.response)

        print("-" * 70)
        if final_response:
            print(f"\n🤖 Agent:\n\n{final_response}")
            if collector.sources:
                print("\n📚 Sources:")
                for source in collector.sources:
                    print(f"   • {source}")
        else:
            print("\n⚠️  No response generated. The agent may have encountered an error.")

        print("\n" + "=" * 70)


if __name__ == "__main__":
    asyncio.run(run_agent())
