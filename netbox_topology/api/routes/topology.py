"""Topology routes - построение топологии из данных NetBox."""

from typing import Optional

from fastapi import APIRouter, Request

from ...config import config
from ...core.constants import REQUIRED_PAYLOAD_LISTS, OPTIONAL_PAYLOAD_LISTS
from ...core.domain import NeighborReportNormalizer, assemble_topology
from ...core.models import DiscoveryResult
from ...netbox import NetBoxClient
from ..schemas import AdaptRequest, NetBoxImportRequest, TopologyOptions, TopologyResponse

router = APIRouter()


def _build_response(result: DiscoveryResult, options: TopologyOptions) -> TopologyResponse:
    """DiscoveryResult → TopologyResponse."""
    report = result.report.to_dict() if options.include_report and result.report else None
    return TopologyResponse(
        success=True,
        partial=result.is_partial,
        result=result.to_dict(),
        report=report,
    )


def _scan_name(options: TopologyOptions) -> str:
    return options.name or config.topology.scan_name


@router.post(
    "/adapt",
    response_model=TopologyResponse,
    summary="Собрать топологию из снимка NetBox",
)
def adapt_topology(body: AdaptRequest):
    """
    Преобразует снимок NetBox (тело запроса) в DiscoveryResult.

    Отброшенные кабели и LLDP-записи не являются ошибкой:
    ответ 200 с partial=true и отчётом в report.

    Ошибки:
    - 422: нарушена структура обязательных полей
    """
    payload = body.model_dump(include=set(REQUIRED_PAYLOAD_LISTS + OPTIONAL_PAYLOAD_LISTS))
    payload["lldp_neighbors"] = NeighborReportNormalizer().normalize_dicts(body.lldp_neighbors)

    result = assemble_topology(payload, name=_scan_name(body), strict=body.strict)
    return _build_response(result, body)


@router.post(
    "/netbox",
    response_model=TopologyResponse,
    summary="Загрузить снимок из NetBox и собрать топологию",
)
def import_from_netbox(request: Request, body: NetBoxImportRequest):
    """
    Читает снимок из NetBox API и собирает топологию.

    NetBox config: тело запроса > headers (X-NetBox-URL, X-NetBox-Token)
    > переменные окружения / config.yaml.

    Ошибки:
    - 400: URL или токен NetBox не заданы
    - 502: NetBox недоступен или вернул ошибку
    """
    url: Optional[str] = body.url or request.headers.get("X-NetBox-URL")
    token: Optional[str] = body.token or request.headers.get("X-NetBox-Token")

    client = NetBoxClient(url=url, token=token, ssl_verify=body.verify_ssl)
    neighbors = NeighborReportNormalizer().normalize_dicts(body.lldp_neighbors)
    payload = client.fetch_topology(lldp_neighbors=neighbors)

    result = assemble_topology(payload, name=_scan_name(body), strict=body.strict)
    return _build_response(result, body)
