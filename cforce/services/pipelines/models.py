"""Result schemas for the intelligence pipelines.

Every field is optional. Leaf values are kept as whatever JSON value the model
produced (counts and scores arrive as numbers or strings). Nested records are
built when the value has the expected shape and kept raw otherwise, so an
off-shape container never fails a run. Unknown keys are dropped and absent
keys stay unset, so ``to_payload`` reproduces exactly what the model supplied.
"""

from typing import Annotated, Any, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from cforce.config.constants import PipelineKind

T = TypeVar("T")

# The record when the value fits, otherwise the raw JSON value.
Lenient = Annotated[Union[T, Any], Field(union_mode="left_to_right")]


class ResultModel(BaseModel):
    """Base for camelCase, immutable, all-optional result records."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


# --- Scan ---


class TechnicalProfile(ResultModel):
    hosting: Any = None
    isp: Any = None
    asn: Any = None
    server: Any = None
    tech_stack: Any = None
    tls_config: Any = None
    waf: Any = None


class OpenPort(ResultModel):
    port: Any = None
    service: Any = None
    version: Any = None
    info: Any = None


class Vulnerability(ResultModel):
    id: Any = None
    title: Any = None
    type: Any = None
    severity: Any = None
    cvss: Any = None
    affected_component: Any = None
    description: Any = None
    exploit_info: Any = None
    remediation: Any = None
    mitigated_by_waf: Any = None


class ScanResult(ResultModel):
    """Passive vulnerability scan report."""

    target: Any = None
    server_ip: Any = None
    status: Any = None
    exposure_summary: Any = None
    risk_assessment: Any = None
    disclaimer: Any = None
    technical_profile: Lenient[TechnicalProfile] = None
    open_ports: Lenient[list[Lenient[OpenPort]]] = None
    vulnerabilities: Lenient[list[Lenient[Vulnerability]]] = None
    hardening_recommendations: Any = None


# --- OSINT ---


class DomainProfile(ResultModel):
    domain: Any = None
    registrar: Any = None
    creation_date: Any = None
    expiry_date: Any = None
    ownership: Any = None
    dns_records: Any = None


class InfrastructureProfile(ResultModel):
    ip_addresses: Any = None
    geolocation: Any = None
    hosting: Any = None
    asn: Any = None
    waf: Any = None


class ExposedAssets(ResultModel):
    subdomains: Any = None
    indexed_urls: Any = None
    public_files: Any = None


class OsintResult(ResultModel):
    """Open-source intelligence profile of a domain."""

    target: Any = None
    executive_summary: Any = None
    domain_profile: Lenient[DomainProfile] = None
    infrastructure_profile: Lenient[InfrastructureProfile] = None
    tech_stack_overview: Any = None
    exposed_assets: Lenient[ExposedAssets] = None
    historical_intelligence: Any = None
    observations: Any = None
    disclaimer: Any = None


# --- IP trace ---


class NetworkOverview(ResultModel):
    total_asns: Any = None
    ip_allocations_count: Any = None
    total_ip_count: Any = None
    connectivity_score: Any = None


class AsnMapping(ResultModel):
    asn: Any = None
    organization: Any = None
    ranges: Any = None
    type: Any = None


class IspProfile(ResultModel):
    name: Any = None
    market_share: Any = None
    services: Any = None


class NetworkInfrastructure(ResultModel):
    ixps: Any = None
    transit_providers: Any = None
    cloud_providers: Any = None


class Reputation(ResultModel):
    abuse_rating: Any = None
    blacklist_stats: Any = None


class IpTraceResult(ResultModel):
    """Country-level IP allocation and network intelligence."""

    target: Any = None
    executive_summary: Any = None
    network_overview: Lenient[NetworkOverview] = None
    all_country_ip_ranges: Any = None
    asn_mapping: Lenient[list[Lenient[AsnMapping]]] = None
    isp_profile: Lenient[list[Lenient[IspProfile]]] = None
    infrastructure: Lenient[NetworkInfrastructure] = None
    reputation: Lenient[Reputation] = None
    observations: Any = None
    disclaimer: Any = None


PipelineResult = ScanResult | OsintResult | IpTraceResult

RESULT_MODELS: dict[PipelineKind, type[ResultModel]] = {
    PipelineKind.SCAN: ScanResult,
    PipelineKind.OSINT: OsintResult,
    PipelineKind.IP_TRACE: IpTraceResult,
}


def to_payload(result: ResultModel) -> dict[str, Any]:
    """Dump a result back to its wire shape (camelCase, only supplied fields)."""
    return result.model_dump(by_alias=True, exclude_unset=True)
