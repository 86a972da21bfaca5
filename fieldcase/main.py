from fastapi import FastAPI, HTTPException
from .cases import CaseStyle, UnknownCaseStyle, available_cases
from .models import (
    CaseInfo,
    CasesResponse,
    FilterConfig,
    HealthResponse,
    TransformErrorDetail,
    TransformRequest,
    TransformResponse,
)
from .transform import LineTransformError, split_text_lines, transform_lines

app = FastAPI(
    title="fieldcase",
    description="Rewrite delimited fields into a chosen case style",
    version="0.1.0",
)

@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.get("/cases", response_model=CasesResponse)
def cases():
    return {"cases": [CaseInfo(name=c.value, display=c.display) for c in available_cases()]}

@app.post("/transform", response_model=TransformResponse)
def transform(req: TransformRequest):
    try:
        style = CaseStyle.resolve(req.case)
    except UnknownCaseStyle as exc:
        raise HTTPException(
            status_code=422,
            detail={"message": str(exc), "available": [c.display for c in available_cases()]},
        )

    config = FilterConfig(delimiter=req.delim, targets=tuple(req.targets), style=style)

    try:
        lines = list(transform_lines(config, split_text_lines(req.text)))
    except LineTransformError as exc:
        detail = TransformErrorDetail(
            line=exc.line, column=exc.column, word=exc.word, case=exc.case, message=str(exc),
        )
        raise HTTPException(status_code=422, detail=detail.model_dump())

    return {"lines": lines, "count": len(lines)}
