from fastapi import APIRouter
from fastapi.responses import JSONResponse

from health_assistant.services.references import all_reference_ranges, lookup_reference_range

router = APIRouter(prefix="/api/references", tags=["references"])


@router.get("")
def list_references():
    return {
        "statusCode": 200,
        "message": "Success",
        "data": [entry.model_dump() for entry in all_reference_ranges()],
    }


@router.get("/{lab_name}")
def get_reference_range(lab_name: str):
    lookup = lookup_reference_range(lab_name)
    if not lookup.success:
        return JSONResponse(
            status_code=404,
            content={
                "statusCode": 404,
                "message": lookup.error,
                "error": "NotFound",
                "details": {"suggestions": lookup.suggestions},
            },
        )
    return {
        "statusCode": 200,
        "message": "Success",
        "data": lookup.model_dump(exclude={"success", "error", "suggestions"}),
    }
