"""KServe custom model runtime for the question-answering path."""

from __future__ import annotations

from typing import Any

import kserve
from kserve.errors import InvalidInput

from rag_assistant.container import ServiceContainer
from rag_assistant.errors import ErrorKind, RagError
from rag_assistant.generation.orchestrator import AnswerResult


class RAGAssistantModel(kserve.Model):
    """KServe-compatible model that wraps the answer orchestrator.

    This class implements the ``predict`` interface expected by KServe
    so the assistant can be deployed as an ``InferenceService``.
    """

    def __init__(self, name: str = "rag-assistant", container: ServiceContainer | None = None) -> None:
        super().__init__(name)
        self.container = container
        self.ready = container is not None

    def load(self) -> bool:
        """Connect to the configured backends (called once at startup)."""
        if self.container is None:
            self.container = ServiceContainer.from_settings()
        self.ready = True
        return self.ready

    def predict(self, payload: dict[str, Any], headers: dict[str, str] | None = None) -> dict:
        """Run inference — called on every request.

        Parameters
        ----------
        payload:
            ``{"instances": [{"question": "...", "detailed": true}]}``.
        headers:
            Optional HTTP headers.

        Returns
        -------
        dict
            ``{"predictions": [...]}``, one entry per instance: an
            ``AnswerResult`` dict (camelCase keys) when ``detailed`` is
            true, the bare answer string otherwise.

        Raises
        ------
        kserve.errors.InvalidInput
            An instance carries a blank question (HTTP 400).
        ServiceError
            A backend stage failed; the model server answers 500.
        """
        instances = payload.get("instances", [])
        predictions: list[Any] = []

        for instance in instances:
            try:
                result = self.container.orchestrator.answer(
                    instance.get("question", ""),
                    detailed=bool(instance.get("detailed", True)),
                )
            except RagError as exc:
                if exc.kind is ErrorKind.SERVICE:
                    raise
                raise InvalidInput(str(exc)) from exc
            if isinstance(result, AnswerResult):
                predictions.append(result.model_dump(by_alias=True))
            else:
                predictions.append(result)

        return {"predictions": predictions}


if __name__ == "__main__":
    model = RAGAssistantModel()
    model.load()
    kserve.ModelServer().start([model])
