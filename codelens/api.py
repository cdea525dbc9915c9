import logging

from functools import lru_cache
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from codelens.config import get_settings
from codelens.constants import DEFAULT_DETAIL, DEFAULT_FOCUS
from codelens.database import init_db, save_analysis, get_analysis, list_analyses
from codelens.errors import ConfigurationError
from codelens.models import AnalysisOptions, AnalysisRecord, AnalysisRequest
from codelens.registry import ProviderRegistry
from codelens.service import AnalysisService

settings = get_settings()
logging.basicConfig(level=settings.LOG_LEVEL)

# Initialize DB
init_db()

RECENT_ANALYSES_LIMIT = 5

app = FastAPI(
    title="Codelens Code Analysis API",
    description="Analyze code snippets with pluggable LLM providers and keep the results.",
    version="1.0.0",
)

origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:8000",
    "http://127.0.0.1:8000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class CodeAnalysisRequest(BaseModel):
    code: str = Field(..., min_length=10, description="The code snippet to be analyzed.")
    provider: Optional[str] = Field(None, description="Provider id, e.g. 'gemini' or 'ollama'.")
    model: Optional[str] = Field(None, description="Model id; the provider default is used when unset.")
    focus: Optional[str] = Field(None, description="Area the review should focus on.")
    detail: Optional[str] = Field(None, description="Requested level of detail.")
    save: bool = Field(False, description="Store the analysis when it succeeds.")
    file_name: Optional[str] = Field(None, max_length=255, description="Name shown in the history.")

    def to_analysis_request(self) -> AnalysisRequest:
        return AnalysisRequest(
            code=self.code,
            options=AnalysisOptions(
                model=self.model,
                focus=self.focus or DEFAULT_FOCUS,
                detail=self.detail or DEFAULT_DETAIL,
            ),
        )


@lru_cache
def get_registry() -> ProviderRegistry:
    return ProviderRegistry(get_settings())


def get_service(registry: ProviderRegistry = Depends(get_registry)) -> AnalysisService:
    return AnalysisService(registry, sink=save_analysis)


@app.post("/analyze-code", tags=["Analysis"])
async def analyze_code(
    request_data: CodeAnalysisRequest,
    service: AnalysisService = Depends(get_service),
):
    analysis_request = request_data.to_analysis_request()
    try:
        report = await service.analyze(
            analysis_request.code,
            analysis_request.options,
            provider=request_data.provider,
            save=request_data.save,
            file_name=request_data.file_name,
        )
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logging.error(f"An unexpected server error occurred: {e}")
        return JSONResponse(status_code=500, content={"status": "error", "message": str(e)})

    return report.model_dump(exclude_none=True)


@app.post("/save-analysis", tags=["Analysis"])
async def save_analysis_endpoint(record: AnalysisRecord):
    analysis_id = save_analysis(record)
    if analysis_id is None:
        return JSONResponse(
            status_code=500,
            content={"status": "error", "message": "Failed to save analysis"},
        )

    return {
        "status": "success",
        "message": "Analysis saved successfully!",
        "id": analysis_id,
    }


@app.get("/providers", tags=["Providers"])
async def get_providers(registry: ProviderRegistry = Depends(get_registry)):
    return await registry.get_available_providers()


@app.get("/analyses", tags=["History"])
async def get_history():
    return list_analyses()


@app.get("/analyses/recent", tags=["History"])
async def get_recent_analyses():
    return list_analyses(limit=RECENT_ANALYSES_LIMIT)


@app.get("/analyses/{analysis_id}", tags=["History"])
async def get_analysis_endpoint(analysis_id: int):
    analysis = get_analysis(analysis_id)
    if not analysis:
        return JSONResponse(
            status_code=404,
            content={"status": "error", "message": "Analysis not found"},
        )

    return {"status": "success", "analysis": analysis}
