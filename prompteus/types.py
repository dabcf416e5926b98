"""Response shapes returned and raised by the neuron client."""

from typing import Optional, TypedDict


class SuccessResult(TypedDict, total=False):
    """Decoded body of a successful, non-raw neuron call.

    All keys are set by the server and may be absent. Any extra keys the
    server sends are passed through untouched.
    """

    output: str
    fromCache: bool
    executionStopped: bool


class ErrorResult(TypedDict):
    """Dict form of a :class:`~prompteus.client.PrompteusError`.

    ``statusCode`` is always an int for validation and server errors. It is
    ``None`` only for a :class:`~prompteus.client.TransportError` raised when
    no response was received. ``error`` is a string unless the server sent a
    structured value, which is passed through as decoded.
    """

    error: str
    statusCode: Optional[int]
