# content_recommender/infrastructure/document_loader.py

import csv
import json
from pathlib import Path
from typing import List

from content_recommender.domain.interfaces import DocumentSourcePort
from content_recommender.domain.models import Document


SUPPORTED_EXTENSIONS = {".json", ".jsonl", ".csv"}


class DocumentLoader(DocumentSourcePort):
    """
    Loads document records ({"id": ..., "content": ..., **extra}) from disk.

    - .json  → a top-level array of objects
    - .jsonl → one object per line
    - .csv   → header row with at least "id" and "content" columns

    Records are returned as-is; validation is the recommender's job.
    """

    def load_directory(self, directory_path: str) -> List[Document]:
        data_dir = Path(directory_path)
        if not data_dir.exists():
            raise FileNotFoundError(f"Data directory not found: {directory_path}")

        all_documents: List[Document] = []

        for file_path in sorted(data_dir.rglob("*")):
            documents = self.load_file(file_path)
            if documents:
                all_documents.extend(documents)
                print(f"[DocumentLoader] Loaded {len(documents)} documents from {file_path.name}")

        print(f"[DocumentLoader] Total documents loaded: {len(all_documents)}")
        return all_documents

    def load_file(self, file_path) -> List[Document]:
        """
        Load one supported file. Unsupported file types yield an empty list;
        malformed content raises ValueError naming the file.
        """
        file_path = Path(file_path)
        suffix = file_path.suffix.lower()

        if suffix == ".json":
            return self._load_json_file(file_path)
        elif suffix == ".jsonl":
            return self._load_jsonl_file(file_path)
        elif suffix == ".csv":
            return self._load_csv_file(file_path)
        return []

    # ─── Private: File Loaders ────────────────────────────────────────────────

    def _load_json_file(self, file_path: Path) -> List[Document]:
        try:
            data = json.loads(file_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as error:
            raise ValueError(f"Invalid JSON in {file_path.name}: {error}") from error

        if not isinstance(data, list):
            raise ValueError(f"{file_path.name} should contain an array of documents")
        return data

    def _load_jsonl_file(self, file_path: Path) -> List[Document]:
        documents = []
        with open(file_path, encoding="utf-8") as f:
            for line_number, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    documents.append(json.loads(line))
                except json.JSONDecodeError as error:
                    raise ValueError(
                        f"Invalid JSON on line {line_number} of {file_path.name}: {error}"
                    ) from error
        return documents

    def _load_csv_file(self, file_path: Path) -> List[Document]:
        with open(file_path, encoding="utf-8", newline="") as f:
            reader = csv.DictReader(f)
            missing = {"id", "content"} - set(reader.fieldnames or [])
            if missing:
                raise ValueError(f"{file_path.name} is missing columns: {sorted(missing)}")
            return [dict(row) for row in reader]
