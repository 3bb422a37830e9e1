from fastapi import APIRouter, Body

from sunset_engine.session import get_session

router = APIRouter(prefix="/params", tags=["params"])


@router.get("")
def export_params():
    return get_session().params.export()


@router.put("")
def import_params(bundle: dict = Body(...)):
    """Replace weights and models with ``bundle``. Rejected bundles change nothing."""
    return get_session().import_params(bundle).model_dump(mode="json")


@router.post("/reset")
def reset_params():
    return get_session().reset_params().model_dump(mode="json")


@router.post("/normalize")
def normalize_params():
    return get_session().normalize_params().model_dump(mode="json")


@router.put("/weights/{factor}")
def set_weight(factor: str, value: float = Body(..., embed=True)):
    return get_session().set_weight(factor, value).model_dump(mode="json")
