"""Per-page view models built from pipeline results.

Every accessor here is total: absent or oddly-typed fields render as the
placeholder instead of failing.
"""

import json
from typing import Any, Callable

from pydantic import BaseModel

from cforce.config.constants import PLACEHOLDER, PipelineKind, Severity
from cforce.services.pipelines.models import (
    IpTraceResult,
    OsintResult,
    PipelineResult,
    ScanResult,
)

_LABEL_KEYS = ("organization", "org", "name", "label", "value")


def render_safe(value: Any) -> str:
    """Render any model-supplied value as display text."""
    if value is None:
        return PLACEHOLDER
    if hasattr(value, "model_dump"):
        value = value.model_dump(by_alias=True, exclude_unset=True)
    if isinstance(value, list):
        return ", ".join(render_safe(v) for v in value)
    if isinstance(value, dict):
        for key in _LABEL_KEYS:
            if value.get(key):
                return str(value[key])
        return json.dumps(value, ensure_ascii=False, default=str)
    return str(value)


def field_of(obj: Any, name: str) -> Any:
    """Read an optional field from a record. Raw values have no fields."""
    if not isinstance(obj, BaseModel):
        return None
    return getattr(obj, name, None)


def items_of(value: Any) -> list[Any]:
    """Return value as a list: None is empty, a lone value is one item."""
    if value is None:
        return []
    return list(value) if isinstance(value, list) else [value]


def _status_alert(status: Any) -> bool:
    text = str(status or "").upper()
    return Severity.CRITICAL.value in text or Severity.HIGH.value in text


def build_scan_view(result: ScanResult) -> dict[str, Any]:
    profile = result.technical_profile
    return {
        "heading": f"VULN REPORT / {render_safe(result.target)}",
        "target": render_safe(result.target),
        "server_ip": render_safe(result.server_ip),
        "status": render_safe(result.status),
        "status_alert": _status_alert(result.status),
        "exposure_summary": render_safe(result.exposure_summary),
        "risk_assessment": render_safe(result.risk_assessment),
        "technical_profile": {
            "hosting": render_safe(field_of(profile, "hosting")),
            "isp": render_safe(field_of(profile, "isp")),
            "asn": render_safe(field_of(profile, "asn")),
            "server": render_safe(field_of(profile, "server")),
            "waf": render_safe(field_of(profile, "waf")),
            "tls_config": render_safe(field_of(profile, "tls_config")),
        },
        "tech_stack": [render_safe(t) for t in items_of(field_of(profile, "tech_stack"))],
        "open_ports": [
            {
                "port": render_safe(field_of(p, "port")),
                "service": render_safe(field_of(p, "service")),
                "version": render_safe(field_of(p, "version")),
                "info": render_safe(field_of(p, "info")),
            }
            for p in items_of(result.open_ports)
        ],
        "vulnerabilities": [
            {
                "id": render_safe(field_of(v, "id")),
                "title": render_safe(field_of(v, "title")),
                "type": render_safe(field_of(v, "type")),
                "severity": render_safe(field_of(v, "severity")),
                "critical": str(field_of(v, "severity") or "").upper() == Severity.CRITICAL.value,
                "cvss": render_safe(field_of(v, "cvss")),
                "affected_component": render_safe(field_of(v, "affected_component")),
                "description": render_safe(field_of(v, "description")),
                "exploit_info": render_safe(field_of(v, "exploit_info")),
                "remediation": render_safe(field_of(v, "remediation")),
                "mitigated_by_waf": render_safe(field_of(v, "mitigated_by_waf")),
            }
            for v in items_of(result.vulnerabilities)
        ],
        "hardening_recommendations": [
            render_safe(r) for r in items_of(result.hardening_recommendations)
        ],
        "disclaimer": render_safe(result.disclaimer),
    }


def build_osint_view(result: OsintResult) -> dict[str, Any]:
    domain = result.domain_profile
    infra = result.infrastructure_profile
    assets = result.exposed_assets
    target = result.target or field_of(domain, "domain")
    return {
        "heading": f"OSINT REPORT / {render_safe(target)}",
        "target": render_safe(target),
        "registrar": render_safe(field_of(domain, "registrar")),
        "executive_summary": render_safe(result.executive_summary),
        "domain_profile": {
            "domain": render_safe(field_of(domain, "domain")),
            "created": render_safe(field_of(domain, "creation_date")),
            "expires": render_safe(field_of(domain, "expiry_date")),
            "owner": render_safe(field_of(domain, "ownership")),
            "dns_records": render_safe(field_of(domain, "dns_records")),
        },
        "infrastructure_profile": {
            "ip_addresses": render_safe(field_of(infra, "ip_addresses")),
            "geolocation": render_safe(field_of(infra, "geolocation")),
            "hosting": render_safe(field_of(infra, "hosting")),
            "asn": render_safe(field_of(infra, "asn")),
            "waf": render_safe(field_of(infra, "waf")),
        },
        "tech_stack": [render_safe(t) for t in items_of(result.tech_stack_overview)],
        "subdomains": [render_safe(s) for s in items_of(field_of(assets, "subdomains"))],
        "indexed_urls": [render_safe(u) for u in items_of(field_of(assets, "indexed_urls"))],
        "public_files": [render_safe(f) for f in items_of(field_of(assets, "public_files"))],
        "historical_intelligence": render_safe(result.historical_intelligence),
        "observations": [render_safe(o) for o in items_of(result.observations)],
        "disclaimer": render_safe(result.disclaimer),
    }


def build_ip_trace_view(result: IpTraceResult) -> dict[str, Any]:
    overview = result.network_overview
    infra = result.infrastructure
    ranges = items_of(result.all_country_ip_ranges)
    return {
        "heading": f"COUNTRY NET MAP / {render_safe(result.target)}",
        "target": render_safe(result.target),
        "executive_summary": render_safe(result.executive_summary),
        "network_overview": {
            "total_asns": render_safe(field_of(overview, "total_asns")),
            "ip_allocations_count": render_safe(field_of(overview, "ip_allocations_count")),
            "total_ip_count": render_safe(field_of(overview, "total_ip_count")),
            "connectivity_score": render_safe(field_of(overview, "connectivity_score")),
        },
        "ip_ranges": [render_safe(r) for r in ranges],
        "ip_ranges_empty": not ranges,
        "asn_mapping": [
            {
                "asn": render_safe(field_of(a, "asn")),
                "organization": render_safe(field_of(a, "organization")),
                "ranges": [render_safe(r) for r in items_of(field_of(a, "ranges"))],
                "type": render_safe(field_of(a, "type")),
            }
            for a in items_of(result.asn_mapping)
        ],
        "isp_profile": [
            {
                "name": render_safe(field_of(i, "name")),
                "market_share": render_safe(field_of(i, "market_share")),
                "services": render_safe(field_of(i, "services")),
            }
            for i in items_of(result.isp_profile)
        ],
        "infrastructure": {
            "ixps": render_safe(field_of(infra, "ixps")),
            "transit_providers": render_safe(field_of(infra, "transit_providers")),
            "cloud_providers": render_safe(field_of(infra, "cloud_providers")),
        },
        "reputation": {
            "abuse_rating": render_safe(field_of(result.reputation, "abuse_rating")),
            "blacklist_stats": render_safe(field_of(result.reputation, "blacklist_stats")),
        },
        "observations": [render_safe(o) for o in items_of(result.observations)],
        "disclaimer": render_safe(result.disclaimer),
    }


VIEW_BUILDERS: dict[PipelineKind, Callable[[Any], dict[str, Any]]] = {
    PipelineKind.SCAN: build_scan_view,
    PipelineKind.OSINT: build_osint_view,
    PipelineKind.IP_TRACE: build_ip_trace_view,
}


def build_view(kind: PipelineKind, result: PipelineResult) -> dict[str, Any]:
    """Flatten a result of the given kind into display-ready fields."""
    return VIEW_BUILDERS[kind](result)
