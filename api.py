from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, List, Optional
import uvicorn

from content_recommender.application.recommender import ContentBasedRecommender
from content_recommender.domain.errors import InitializationError, RecommenderError
from content_recommender.infrastructure.model_store import JsonModelStore

# ── Configuration ────────────────────────────────────────────────────────────
MODEL_PATH = "./models/model.json"

# ── API Models ───────────────────────────────────────────────────────────────
class DocumentSchema(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    content: str

class TrainRequest(BaseModel):
    documents: List[DocumentSchema]

class BidirectionalTrainRequest(BaseModel):
    documents: List[DocumentSchema]
    target_documents: List[DocumentSchema]

class SimilarDocumentSchema(BaseModel):
    id: str
    score: float

class SimilarDocumentsResponse(BaseModel):
    id: str
    similar: List[SimilarDocumentSchema]

# ── App Initialization ───────────────────────────────────────────────────────
app = FastAPI(
    title="Content Recommender API",
    description="TF-IDF + cosine similarity recommendations over short documents.",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:8080", "http://127.0.0.1:8080"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Global scope for singleton behavior
recommender = ContentBasedRecommender()
model_store = JsonModelStore(MODEL_PATH)

if model_store.exists():
    print("[API] Saved model detected. Service is READY.")
    recommender.import_model(model_store.load())
else:
    print("[API] WARNING: No saved model. POST /train to build one.")

def _to_http_error(error: RecommenderError) -> HTTPException:
    if isinstance(error, InitializationError):
        return HTTPException(status_code=503, detail=str(error))
    return HTTPException(status_code=400, detail=str(error))

def _as_records(documents: List[DocumentSchema]) -> List[Dict[str, Any]]:
    return [document.model_dump() for document in documents]

# ── Endpoints ────────────────────────────────────────────────────────────────
@app.get("/status")
def get_status():
    """Returns whether a model is trained and the options it uses."""
    return {
        "is_trained": bool(recommender.document_ids),
        "documents": len(recommender.document_ids),
        "options": recommender.options.to_dict(),
    }

@app.put("/options")
def set_options(options: Dict[str, Any]):
    """Validate and apply new options (merged over the defaults)."""
    try:
        recommender.configure(options)
    except RecommenderError as e:
        raise _to_http_error(e)
    return {"options": recommender.options.to_dict()}

@app.post("/train")
async def train(request: TrainRequest):
    """Train on one collection and persist the resulting model."""
    try:
        await recommender.train(_as_records(request.documents))
    except RecommenderError as e:
        raise _to_http_error(e)

    _save_model()
    return {"message": "Training complete.", "documents": len(recommender.document_ids)}

@app.post("/train/bidirectional")
async def train_bidirectional(request: BidirectionalTrainRequest):
    """Train across two collections (e.g. posts and tags) and persist the model."""
    try:
        await recommender.train_bidirectional(
            _as_records(request.documents),
            _as_records(request.target_documents),
        )
    except RecommenderError as e:
        raise _to_http_error(e)

    _save_model()
    return {"message": "Training complete.", "documents": len(recommender.document_ids)}

@app.get("/documents/{document_id}/similar", response_model=SimilarDocumentsResponse)
def get_similar_documents(
    document_id: str,
    start: int = Query(0, ge=0),
    size: Optional[int] = Query(None, ge=0),
):
    """Ranked neighbours of a document; without size the whole list is returned."""
    similar = recommender.get_similar_documents(document_id, start, size)
    return SimilarDocumentsResponse(
        id=document_id,
        similar=[SimilarDocumentSchema(id=s.id, score=s.score) for s in similar],
    )

@app.get("/model")
def export_model():
    return recommender.export()

@app.put("/model")
def import_model(model: Dict[str, Any]):
    """Replace options and/or similarity data with a previously exported model."""
    try:
        recommender.import_model(model)
    except RecommenderError as e:
        raise _to_http_error(e)

    _save_model()
    return {"message": "Model imported.", "documents": len(recommender.document_ids)}

def _save_model() -> None:
    try:
        model_store.save(recommender.export())
    except RuntimeError as e:
        print(f"[API] Saving model failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
