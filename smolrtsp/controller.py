"""Dispatching RTSP requests to a controller."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from smolrtsp.context import Context, ResponseWriter
from smolrtsp.message import Request
from smolrtsp.status import Method


class ControlFlow(Enum):
    """Whether dispatch goes on to the method handler."""

    CONTINUE = "continue"
    BREAK = "break"


class Controller(ABC):
    """Handles the requests of one RTSP connection."""

    @abstractmethod
    def options(self, ctx: Context, req: Request) -> None:
        """Handle ``OPTIONS``."""

    @abstractmethod
    def describe(self, ctx: Context, req: Request) -> None:
        """Handle ``DESCRIBE``."""

    @abstractmethod
    def setup(self, ctx: Context, req: Request) -> None:
        """Handle ``SETUP``."""

    @abstractmethod
    def play(self, ctx: Context, req: Request) -> None:
        """Handle ``PLAY``."""

    @abstractmethod
    def teardown(self, ctx: Context, req: Request) -> None:
        """Handle ``TEARDOWN``."""

    @abstractmethod
    def unknown(self, ctx: Context, req: Request) -> None:
        """Handle any other method."""

    @abstractmethod
    def before(self, ctx: Context, req: Request) -> ControlFlow:
        """Run before the handler; BREAK skips the handler."""

    @abstractmethod
    def after(self, ret: int, ctx: Context, req: Request) -> None:
        """Run after the handler with the result of the response write."""


def dispatch(conn: ResponseWriter, controller: Controller, req: Request) -> int:
    """Route ``req`` to the matching handler of ``controller``.

    ``after`` always runs, even when the handler raises. Returns what the
    response write returned, or 0 if nothing was written.
    """
    ctx = Context(conn, req.cseq)
    handlers = {
        Method.OPTIONS.value: controller.options,
        Method.DESCRIBE.value: controller.describe,
        Method.SETUP.value: controller.setup,
        Method.PLAY.value: controller.play,
        Method.TEARDOWN.value: controller.teardown,
    }
    try:
        if controller.before(ctx, req) is not ControlFlow.BREAK:
            handler = handlers.get(req.start_line.method, controller.unknown)
            handler(ctx, req)
    finally:
        controller.after(ctx.ret, ctx, req)
    return ctx.ret