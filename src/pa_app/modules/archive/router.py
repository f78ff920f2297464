# src/pa_app/modules/archive/router.py
from fastapi import APIRouter

from pa_app.api.deps import SettingsDep
from pa_app.core.errors import to_http

from .schemas import ScanRequest, ScanResponse
from .service import ScanService

router = APIRouter(prefix="/archive", tags=["archive"])


@router.post(
    "/scan",
    response_model=ScanResponse,
    summary="Walk a YYYY/MM/DD photo archive",
    description=(
        "Traverse `root` year → month → day (plus one level of day subdirectories) "
        "and run the file processor on every leaf file.\n\n"
        "- `year`/`month`/`day` restrict the walk to matching directories\n"
        "- `exact_path` treats `root` as the directory of the deepest preset level\n"
        "- `tag` only counts JPEGs whose IPTC Keywords contain that word\n\n"
        "The archive is never modified; diagnostics are returned in traversal order."
    ),
)
def scan(req: ScanRequest, settings: SettingsDep) -> ScanResponse:
    try:
        return ScanService(settings).run(req)
    except Exception as err:
        raise to_http(err) from err
