# content_recommender/infrastructure/model_store.py

import json
from pathlib import Path
from typing import Optional

from content_recommender.domain.interfaces import ModelStorePort


class JsonModelStore(ModelStorePort):
    """
    Persists an exported {options, data} model as a single JSON file so a
    trained recommender survives process restarts.

    Writes go to a sibling temporary file first and are then renamed over
    the target, so a crash mid-write never leaves a truncated model behind.
    """

    def __init__(self, path: str):
        self._path = Path(path)

        if self._path.exists() and self._path.is_dir():
            raise RuntimeError(f"Failed to initialize model store: path '{path}' is a directory.")

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def save(self, model: dict) -> None:
        if not isinstance(model, dict) or not ({"options", "data"} & model.keys()):
            raise ValueError("Model should be an exported structure with options and/or data.")

        self._path.parent.mkdir(parents=True, exist_ok=True)
        temporary_path = self._path.with_suffix(self._path.suffix + ".tmp")

        try:
            with open(temporary_path, "w", encoding="utf-8") as f:
                json.dump(model, f, ensure_ascii=False)
            temporary_path.replace(self._path)
        except (OSError, TypeError) as error:
            temporary_path.unlink(missing_ok=True)
            raise RuntimeError(
                f"Failed to save model to '{self._path}'.\n"
                f"Original error: {error}"
            ) from error

        document_count = len(model.get("data", {}))
        print(f"[ModelStore] Saved model for {document_count} documents to '{self._path}'.")

    def load(self) -> Optional[dict]:
        if not self.exists():
            return None

        try:
            with open(self._path, "r", encoding="utf-8") as f:
                model = json.load(f)
        except (OSError, json.JSONDecodeError) as error:
            raise RuntimeError(
                f"Failed to load model from '{self._path}'.\n"
                f"The file may be corrupted. Fix: retrain and save again, or delete it.\n"
                f"Original error: {error}"
            ) from error

        if not isinstance(model, dict):
            raise RuntimeError(f"Model file '{self._path}' does not contain a JSON object.")

        print(f"[ModelStore] Loaded model for {len(model.get('data', {}))} documents from '{self._path}'.")
        return model
