# main.py

import argparse
import asyncio
import sys
from pathlib import Path

from content_recommender.application.recommender import ContentBasedRecommender
from content_recommender.domain.errors import RecommenderError
from content_recommender.infrastructure.document_loader import DocumentLoader
from content_recommender.infrastructure.model_store import JsonModelStore
from content_recommender.interface.cli import (
    ask_continue,
    display_error,
    display_similar_documents,
    display_training_status,
    display_welcome_banner,
    prompt_for_document_id,
)


DATA_DIRECTORY = "data"
MODEL_PATH = "./models/model.json"
TOP_K_RESULTS = 10


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Content-based document recommender")
    parser.add_argument("--documents", default=DATA_DIRECTORY,
                        help="Documents file (.json/.jsonl/.csv) or directory")
    parser.add_argument("--targets", help="Target documents for bidirectional training")
    parser.add_argument("--model", default=MODEL_PATH, help="Where the trained model is saved")
    parser.add_argument("--retrain", action="store_true", help="Ignore a saved model and retrain")
    parser.add_argument("--language", default="en", help="Language tag (en, ja)")
    parser.add_argument("--min-score", type=float, default=0.0)
    parser.add_argument("--max-similar", type=int, default=TOP_K_RESULTS)
    parser.add_argument("--max-vector-size", type=int, default=100)
    parser.add_argument("--debug", action="store_true")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    display_welcome_banner()

    # ── 1. Initialize ─────────────────────────────────────────────────────────
    try:
        recommender = ContentBasedRecommender({
            "language": args.language,
            "min_score": args.min_score,
            "max_similar_documents": args.max_similar,
            "max_vector_size": args.max_vector_size,
            "debug": args.debug,
        })
        store = JsonModelStore(args.model)
    except (RecommenderError, RuntimeError) as error:
        display_error(str(error))
        sys.exit(1)

    # ── 2. Restore or train ───────────────────────────────────────────────────
    if store.exists() and not args.retrain:
        print("[Main] Saved model found — skipping training. ✓")
        try:
            recommender.import_model(store.load())
        except (RecommenderError, RuntimeError) as error:
            display_error(str(error))
            sys.exit(1)
        # Documents are only needed to show content next to the ids.
        documents_by_id = _index_documents(_load_display_documents(args.documents))
        restored = True
    else:
        documents = _load_documents(args.documents)
        documents_by_id = _index_documents(documents)
        try:
            _train(recommender, documents, args.targets, documents_by_id)
            store.save(recommender.export())
        except (RecommenderError, RuntimeError) as error:
            display_error(str(error))
            sys.exit(1)
        restored = False

    display_training_status(
        len(recommender.document_ids), recommender.options.language.value, restored
    )

    # ── 3. Interactive lookup loop ────────────────────────────────────────────
    while True:
        document_id = prompt_for_document_id()
        display_similar_documents(
            document_id, recommender.get_similar_documents(document_id), documents_by_id
        )

        if not ask_continue():
            break


def _read_documents(path: str) -> list:
    loader = DocumentLoader()
    if Path(path).is_dir():
        return loader.load_directory(path)
    return loader.load_file(path)


def _load_documents(path: str) -> list:
    try:
        return _read_documents(path)
    except (FileNotFoundError, ValueError) as error:
        display_error(str(error))
        sys.exit(1)


def _load_display_documents(path: str) -> list:
    """Best-effort load for display; a missing or broken source is not fatal."""
    try:
        return _read_documents(path)
    except (FileNotFoundError, ValueError) as error:
        print(f"[Main] Document content unavailable: {error}")
        return []


def _index_documents(documents: list) -> dict:
    return {str(d.get("id")): d for d in documents if isinstance(d, dict)}


def _train(
    recommender: ContentBasedRecommender,
    documents: list,
    targets_path: str,
    documents_by_id: dict,
) -> None:
    if not documents:
        display_error("No documents to train on.")
        sys.exit(1)

    if targets_path:
        targets = _load_documents(targets_path)
        documents_by_id.update(_index_documents(targets))
        print(f"[Main] Training on {len(documents)} documents × {len(targets)} targets...")
        asyncio.run(recommender.train_bidirectional(documents, targets))
    else:
        print(f"[Main] Training on {len(documents)} documents...")
        asyncio.run(recommender.train(documents))


if __name__ == "__main__":
    main()
