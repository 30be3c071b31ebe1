"""
Country IP trace and network OSINT module prompt.
"""

from cforce.config.constants import NETWORK_DISCLAIMER, AsnType
from cforce.config.prompts.common import (
    JSON_ONLY_RULE,
    build_isolation_directive,
    format_allowed,
)


def build_ip_trace_prompt(target: str) -> str:
    """Build the instruction for mapping a country's public IP space."""
    asn_types = format_allowed([t.value for t in AsnType])

    return f"""{build_isolation_directive("IP TRACE & NETWORK OSINT INTELLIGENCE")}

Target Country: {target}

CRITICAL TASK:
Identify and list ALL primary IP ranges (CIDR blocks) allocated to {target} that are visible on the public internet.
You must compile a comprehensive list of network segments representing the country's total IP space.

Scope:
- Strictly Open Source Intelligence (OSINT).
- Publicly available information only.
- No scanning. No probing. No packet inspection. No exploitation.

Tasks:
- Identify all publicly registered ASNs associated with {target}
- COLLECT ALL OFFICIAL IP RANGES (CIDR BLOCKS) allocated to the country. Provide a long, detailed list.
- Identify major ISPs, telecom providers, and hosting companies
- Map ASN ownership and organization details (public records only)
- Determine IP geolocation confidence (registry-based)
- Detect international transit providers and upstream connections
- Identify CDN, cloud, and global providers operating in the country
- Gather public BGP routing information and prefix announcements

OUTPUT FORMAT (STRICT JSON ONLY):
{{
  "target": "{target}",
  "executiveSummary": "Summary of country network intelligence",
  "networkOverview": {{
    "totalAsns": "Count",
    "ipAllocationsCount": "Number of CIDR blocks identified",
    "totalIpCount": "Estimated total number of individual IPs",
    "connectivityScore": "Assessment"
  }},
  "allCountryIpRanges": [
     "CIDR_RANGE_1 (e.g., 1.2.3.0/24)",
     "CIDR_RANGE_2",
     "..."
  ],
  "asnMapping": [
    {{
      "asn": "ASN_ID",
      "organization": "Company Name",
      "ranges": ["CIDR_1", "CIDR_2"],
      "type": "{asn_types}"
    }}
  ],
  "ispProfile": [
    {{
      "name": "Provider Name",
      "marketShare": "Estimated significance",
      "services": "Types of services provided"
    }}
  ],
  "infrastructure": {{
    "ixps": ["Major Exchange Points"],
    "transitProviders": ["Upstream Providers"],
    "cloudProviders": ["Local/Global cloud nodes"]
  }},
  "reputation": {{
    "abuseRating": "General reputation",
    "blacklistStats": "Summary of known malicious segments"
  }},
  "observations": ["Significant finding 1", "Significant finding 2"],
  "disclaimer": "{NETWORK_DISCLAIMER}"
}}

RESTRICTIONS:
Do NOT perform active scanning.
Do NOT discover private user IPs.
Do NOT provide exploitation guidance for any network segment.
"type" MUST be one of: {asn_types}.

{JSON_ONLY_RULE}"""
