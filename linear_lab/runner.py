"""Runner interface for executing agents synchronously."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

from .constants import DEFAULT_HINT_MODEL

__all__ = ["Runner", "get_final_output"]


def get_final_output(res: Any) -> str:  # noqa: ANN401 – generic param
    """Extract the best‑guess textual payload from a runner response."""
    for attr in ("final_output", "output", "content"):
        if hasattr(res, attr):
            val = getattr(res, attr)
            if val is not None:
                return str(val)
    return str(res)


class Runner:
    """Minimal runner that executes an :class:`~linear_lab.agents.Agent` via the
    OpenAI *Responses* API.

    Only the modern Responses API is supported.  The method always returns an
    object with a ``final_output`` attribute containing the model's response.
    Tests monkeypatch :meth:`run_sync`, so nothing here touches the network at
    import time.
    """

    @staticmethod
    def run_sync(
        agent: Any,
        input: Any,
        *,
        api_key: str | None = None,
    ) -> Any:  # pragma: no cover - exercised via mocks
        """Execute ``agent`` with ``input`` and return a namespace containing
        the model's response in ``final_output``.

        Parameters
        ----------
        agent:
            Object with ``instructions`` and optional ``model`` attributes.
        input:
            Data passed to the agent.  It is converted to ``str`` and used as the
            user prompt.
        api_key:
            Explicit key; the OpenAI client reads ``OPENAI_API_KEY`` otherwise.
        """

        try:  # Import lazily so the dependency is optional for testing.
            import openai  # type: ignore
        except Exception as exc:  # pragma: no cover - defensive
            raise RuntimeError("openai package is required to run agents") from exc

        if not hasattr(openai, "OpenAI"):
            raise RuntimeError(
                "openai.OpenAI client with Responses API support is required"
            )

        client: Any = openai.OpenAI(api_key=api_key) if api_key else openai.OpenAI()
        if not hasattr(client, "responses"):
            raise RuntimeError(
                "openai client does not support Responses API; upgrade your package"
            )

        model = getattr(agent, "model", None) or DEFAULT_HINT_MODEL
        messages = [
            {"role": "system", "content": getattr(agent, "instructions", "")},
            {"role": "user", "content": str(input)},
        ]
        resp: Any = client.responses.create(model=model, input=messages)
        return SimpleNamespace(final_output=Runner._extract_output_text(resp))

    @staticmethod
    def _extract_output_text(resp: Any) -> str:
        """Best-effort extraction of textual output from a Responses object.

        Handles multiple SDK shapes:
        - ``resp.output_text`` when available
        - ``resp.output`` as a list of messages with nested content/text/value
        - Falls back to an empty string if no text could be found
        """

        consolidated = getattr(resp, "output_text", None)
        if isinstance(consolidated, str) and consolidated.strip():
            return consolidated

        texts: list[str] = []

        def _collect(obj: Any, depth: int = 0) -> None:
            # Guard against overly deep or cyclic structures
            if depth > 5 or obj is None:
                return
            if isinstance(obj, str):
                if obj.strip():
                    texts.append(obj)
                return
            if isinstance(obj, (list, tuple)):
                for it in obj:
                    _collect(it, depth + 1)
                return
            if isinstance(obj, dict):
                for key in ("text", "value", "content"):
                    if key in obj:
                        _collect(obj[key], depth + 1)
                return
            for attr in ("text", "value", "content"):
                val = getattr(obj, attr, None)
                if val is not None:
                    _collect(val, depth + 1)

        _collect(getattr(resp, "output", None))
        return "\n".join(texts)
