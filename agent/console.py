# =============================================================================
# agent/console.py  —  Console Transport (Google ADK, text in the terminal)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Implements ConversationTransport (agent/session.py) on top of Google ADK
#   so a session can run in a terminal:
#
#     connect()               create the ADK InMemorySessionService
#     wait_for_participant()  ask the person at the keyboard for a name
#     start_session()         build the ADK Agent + Runner + session
#     post_message()          record a message in the ADK session history
#     create_response()       speak (print) the pending assistant message
#     wait_closed()           chat loop until "quit" or EOF
#
#   Tool calls never appear here: ADK invokes RegistryTool.run_async, which
#   calls back into the orchestrator.
# =============================================================================

from __future__ import annotations

import asyncio
import logging

from google.adk.events import Event
from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.home_agent import AGENT_NAME, create_agent
from agent.session import Participant, ToolCallHandler
from core.config import DEFAULT_MODEL
from tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

APP_NAME = "home_assistant"
_QUIT_WORDS = ("quit", "exit", "q")


async def _ainput(prompt: str) -> str:
    return await asyncio.to_thread(input, prompt)


class AdkConversation:
    """One live ADK session with the person at the console."""

    def __init__(self, runner: Runner, session_service: InMemorySessionService, session):
        self.runner = runner
        self.session_service = session_service
        self.session = session
        self._pending: list[str] = []

    async def post_message(self, role: str, text: str) -> None:
        author, content_role = (AGENT_NAME, "model") if role == "assistant" else ("user", "user")
        event = Event(
            author=author,
            content=types.Content(role=content_role, parts=[types.Part(text=text)]),
        )
        await self.session_service.append_event(self.session, event)
        if role == "assistant":
            self._pending.append(text)

    async def create_response(self) -> None:
        # Console mode speaks the queued greeting itself; no model turn is requested.
        while self._pending:
            self._say(self._pending.pop(0))

    async def wait_closed(self) -> None:
        while True:
            try:
                user_input = (await _ainput("\n🧑 You: ")).strip()
            except (EOFError, KeyboardInterrupt):
                print("\n\n👋 Goodbye!")
                return

            if user_input.lower() in _QUIT_WORDS:
                print("\n👋 Goodbye!")
                return
            if not user_input:
                continue

            reply = await self._run_turn(user_input)
            if reply:
                self._say(reply)
            else:
                print("\n⚠️  No response generated.")

    async def _run_turn(self, text: str) -> str:
        message = types.Content(role="user", parts=[types.Part(text=text)])
        final_response = ""
        async for event in self.runner.run_async(
            user_id=self.session.user_id,
            session_id=self.session.id,
            new_message=message,
        ):
            if event.content and event.content.parts:
                for part in event.content.parts:
                    if part.text:
                        final_response = part.text
                    if part.function_call:
                        logger.debug("model called %s", part.function_call.name)
        return final_response

    @staticmethod
    def _say(text: str) -> None:
        print(f"\n🤖 Assistant: {text}")


class ConsoleTransport:
    """ConversationTransport for a single person typing in a terminal."""

    def __init__(self, model: str = DEFAULT_MODEL, participant: str | None = None):
        self.model = model
        self._participant = participant
        self._session_service: InMemorySessionService | None = None

    async def connect(self) -> None:
        self._session_service = InMemorySessionService()
        logger.info("console transport ready (model=%s)", self.model)

    async def wait_for_participant(self) -> Participant:
        if self._participant:
            return Participant(identity=self._participant)
        name = (await _ainput("Who's there? ")).strip()
        return Participant(identity=name or "guest")

    async def start_session(
        self,
        participant: Participant,
        instructions: str,
        tools: ToolRegistry,
        on_tool_call: ToolCallHandler,
    ) -> AdkConversation:
        if self._session_service is None:
            raise RuntimeError("start_session() called before connect()")

        agent = create_agent(instructions, tools, on_tool_call, model=self.model)
        runner = Runner(agent=agent, app_name=APP_NAME, session_service=self._session_service)
        session = await self._session_service.create_session(
            app_name=APP_NAME,
            user_id=participant.identity,
        )
        return AdkConversation(runner, self._session_service, session)
