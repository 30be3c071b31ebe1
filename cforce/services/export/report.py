"""
PDF export of a rendered report view.

Consumes the read-only view model of one pipeline result and produces the
bytes of a downloadable document.
"""

import io
import logging
import re
from typing import Any
from xml.sax.saxutils import escape

from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from cforce.config.constants import PipelineKind

logger = logging.getLogger(__name__)

REPORT_PREFIX = "C-FORCE_REPORT_"

# (section heading, view key) in document order
_SECTIONS: dict[PipelineKind, list[tuple[str, str]]] = {
    PipelineKind.SCAN: [
        ("Risk Assessment", "status"),
        ("Exposure Summary", "exposure_summary"),
        ("Server IP", "server_ip"),
        ("Technical Profile", "technical_profile"),
        ("Technology Stack", "tech_stack"),
        ("Open Ports", "open_ports"),
        ("Vulnerabilities", "vulnerabilities"),
        ("Hardening Recommendations", "hardening_recommendations"),
        ("Final Assessment", "risk_assessment"),
    ],
    PipelineKind.OSINT: [
        ("Executive Summary", "executive_summary"),
        ("Domain Profile", "domain_profile"),
        ("Infrastructure", "infrastructure_profile"),
        ("Technology Stack", "tech_stack"),
        ("Subdomains", "subdomains"),
        ("Indexed URLs", "indexed_urls"),
        ("Public Files", "public_files"),
        ("Historical Intelligence", "historical_intelligence"),
        ("Observations", "observations"),
    ],
    PipelineKind.IP_TRACE: [
        ("Executive Summary", "executive_summary"),
        ("Network Overview", "network_overview"),
        ("IP Ranges (CIDR)", "ip_ranges"),
        ("ASN Mapping", "asn_mapping"),
        ("ISP Profile", "isp_profile"),
        ("Infrastructure", "infrastructure"),
        ("Reputation", "reputation"),
        ("Observations", "observations"),
    ],
}


def report_filename(target: str) -> str:
    """Deterministic document name: every non-alphanumeric character becomes '_'."""
    return f"{REPORT_PREFIX}{re.sub(r'[^a-z0-9]', '_', target, flags=re.IGNORECASE)}.pdf"


def _mapping_line(mapping: dict[str, Any]) -> str:
    parts = []
    for key, value in mapping.items():
        if value is None or isinstance(value, bool):
            continue
        if isinstance(value, list):
            value = ", ".join(str(v) for v in value)
        parts.append(f"<b>{escape(key.replace('_', ' ').title())}:</b> {escape(str(value))}")
    return "<br/>".join(parts)


def _section_flowables(value: Any, styles: Any) -> list[Any]:
    body = styles["BodyText"]
    if isinstance(value, dict):
        return [Paragraph(_mapping_line(value), body)]
    if isinstance(value, list):
        if not value:
            return [Paragraph("None identified.", body)]
        flowables = []
        for item in value:
            if isinstance(item, dict):
                flowables.append(Paragraph(_mapping_line(item), body))
                flowables.append(Spacer(1, 6))
            else:
                flowables.append(Paragraph(escape(str(item)), body, bulletText="•"))
        return flowables
    return [Paragraph(escape(str(value)), body)]


def render_report_pdf(kind: PipelineKind, view: dict[str, Any]) -> bytes:
    """Render one report view to PDF bytes."""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, title=view.get("heading", REPORT_PREFIX))
    styles = getSampleStyleSheet()

    story: list[Any] = [Paragraph(escape(view.get("heading", kind.value)), styles["h1"]), Spacer(1, 12)]
    for heading, key in _SECTIONS[kind]:
        if key not in view:
            continue
        story.append(Paragraph(heading, styles["h2"]))
        story.extend(_section_flowables(view[key], styles))
        story.append(Spacer(1, 12))

    story.append(Paragraph(escape(str(view.get("disclaimer", ""))), styles["Italic"]))
    doc.build(story)

    pdf = buffer.getvalue()
    logger.debug("Rendered %s report: %d bytes", kind.value, len(pdf))
    return pdf
