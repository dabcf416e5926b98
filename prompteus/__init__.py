"""Prompteus Python client for calling hosted neurons.

    import prompteus

    client = prompteus.NeuronClient(credential="pk_...")
    result = client.invoke_neuron("my-org", "summarizer", input="Long text ...")
    print(result["output"], result.get("fromCache"))

    # Skip the server-side cache and get the body back as plain text
    text = client.invoke_neuron(
        "my-org", "summarizer", input="...", bypass_cache=True, raw_output=True
    )
"""

from .client import (
    InvalidArgumentError,
    NeuronClient,
    PrompteusError,
    RemoteError,
    TransportError,
    resolve_credential,
)
from .types import ErrorResult, SuccessResult

__version__ = "0.1.0"
__all__ = [
    "NeuronClient",
    "resolve_credential",
    "PrompteusError",
    "InvalidArgumentError",
    "RemoteError",
    "TransportError",
    "SuccessResult",
    "ErrorResult",
]
