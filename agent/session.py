# =============================================================================
# agent/session.py  —  Session Orchestrator
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Drives one conversation from connection to hang-up.  The lifecycle is a
#   straight line with no cycles:
#
#     CONNECTING ─▶ AWAITING_PARTICIPANT ─▶ INITIALIZING ─▶ GREETING
#                                                             │
#                         TERMINATED ◀──────────── ACTIVE ◀───┘
#
#   CONNECTING            transport.connect(); a failure here is fatal
#   AWAITING_PARTICIPANT  block until someone joins (no timeout imposed)
#   INITIALIZING          start the model session with instructions + tools
#   GREETING              post the opening assistant message, ask the model
#                         to speak
#   ACTIVE                every function call is routed to Dispatcher.invoke
#   TERMINATED            participant left or transport closed
#
# THE TRANSPORT CONTRACT:
#   The realtime audio/model plumbing lives behind ConversationTransport.
#   agent/console.py implements it with Google ADK for a terminal session;
#   tests implement it with a fake.  The orchestrator never does business
#   logic itself: handle_tool_call is pure routing.
# =============================================================================

from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Protocol

from agent.prompt import GREETING, get_assistant_instructions
from tools.registry import Dispatcher, ToolRegistry

logger = logging.getLogger(__name__)

ToolCallHandler = Callable[[str, Any], Awaitable[str]]


class SessionState(enum.Enum):
    CONNECTING = "connecting"
    AWAITING_PARTICIPANT = "awaiting_participant"
    INITIALIZING = "initializing"
    GREETING = "greeting"
    ACTIVE = "active"
    TERMINATED = "terminated"


@dataclass(frozen=True)
class Participant:
    identity: str


class Conversation(Protocol):
    async def post_message(self, role: str, text: str) -> None: ...

    async def create_response(self) -> None: ...

    async def wait_closed(self) -> None: ...


class ConversationTransport(Protocol):
    async def connect(self) -> None: ...

    async def wait_for_participant(self) -> Participant: ...

    async def start_session(
        self,
        participant: Participant,
        instructions: str,
        tools: ToolRegistry,
        on_tool_call: ToolCallHandler,
    ) -> Conversation: ...


class SessionOrchestrator:
    """Runs a single session against a transport, a registry and a dispatcher.

    The orchestrator holds references to the registry and dispatcher but owns
    neither; several orchestrators may share them (and the store behind
    them) in one process.
    """

    def __init__(
        self,
        transport: ConversationTransport,
        dispatcher: Dispatcher,
        instructions: str | None = None,
        greeting: str = GREETING,
    ):
        self.transport = transport
        self.dispatcher = dispatcher
        self.instructions = instructions or get_assistant_instructions()
        self.greeting = greeting
        self.state: SessionState | None = None
        self.history: list[SessionState] = []
        self.participant: Participant | None = None

    @property
    def registry(self) -> ToolRegistry:
        return self.dispatcher.registry

    async def run(self) -> None:
        """Run the session through every state until it terminates."""
        try:
            self._enter(SessionState.CONNECTING)
            await self.transport.connect()

            self._enter(SessionState.AWAITING_PARTICIPANT)
            logger.info("waiting for participant")
            self.participant = await self.transport.wait_for_participant()
            logger.info("starting assistant for %s", self.participant.identity)

            self._enter(SessionState.INITIALIZING)
            conversation = await self.transport.start_session(
                participant=self.participant,
                instructions=self.instructions,
                tools=self.registry,
                on_tool_call=self.handle_tool_call,
            )

            self._enter(SessionState.GREETING)
            await conversation.post_message("assistant", self.greeting)
            await conversation.create_response()

            self._enter(SessionState.ACTIVE)
            await conversation.wait_closed()
        finally:
            self._enter(SessionState.TERMINATED)

    async def handle_tool_call(self, tool_name: str, arguments: Any) -> str:
        """Route one model-issued function call to the dispatcher.

        The dispatch is shielded: if the session is torn down mid-call the
        tool still runs to completion and its result is simply dropped.
        """
        return await asyncio.shield(self.dispatcher.invoke(tool_name, arguments))

    def _enter(self, state: SessionState) -> None:
        if self.state is state:
            return
        logger.debug("session state %s -> %s",
                     self.state.value if self.state else None, state.value)
        self.state = state
        self.history.append(state)
