"""
OSINT gathering module prompt.
"""

from cforce.config.constants import PASSIVE_DISCLAIMER
from cforce.config.prompts.common import JSON_ONLY_RULE, build_isolation_directive


def build_osint_prompt(target: str) -> str:
    """Build the instruction for passive open-source intelligence gathering."""
    return f"""{build_isolation_directive("OSINT INTELLIGENCE GATHERING")}

Target: {target}

Scope:
Strictly Open Source Intelligence (OSINT).
Publicly available information only.
No scanning. No probing. No exploitation.

Tasks:
- Collect domain information and DNS records (publicly available)
- Gather WHOIS and registration details
- Identify ownership and organization (if public)
- Resolve IP address(es) and basic geolocation
- Detect hosting provider, ISP, ASN, and CDN/WAF presence
- Identify web server, technologies, CMS, and frameworks (public indicators only)
- Collect known subdomains from public sources
- Identify related domains and infrastructure (if publicly linked)
- Gather SSL/TLS certificate details (issuer, validity, transparency logs)
- Collect publicly indexed URLs and directories (search-engine based)
- Identify exposed metadata or public files (if indexed)
- Gather historical data (domain age, past DNS, reputation)
- Check public security reputation and blacklist mentions
- Collect social, organizational, and digital footprint references (if available)

OUTPUT FORMAT (STRICT JSON ONLY):
{{
  "target": "{target}",
  "executiveSummary": "Summary of findings",
  "domainProfile": {{
    "domain": "...",
    "registrar": "...",
    "creationDate": "...",
    "expiryDate": "...",
    "ownership": "...",
    "dnsRecords": "..."
  }},
  "infrastructureProfile": {{
    "ipAddresses": ["..."],
    "geolocation": "...",
    "hosting": "...",
    "asn": "...",
    "waf": "..."
  }},
  "techStackOverview": ["...", "..."],
  "exposedAssets": {{
    "subdomains": ["..."],
    "indexedUrls": ["..."],
    "publicFiles": ["..."]
  }},
  "historicalIntelligence": "Historical data and reputation summary",
  "observations": ["Point 1", "Point 2"],
  "disclaimer": "{PASSIVE_DISCLAIMER}"
}}

RESTRICTIONS:
Do NOT perform active scanning or enumeration.
Do NOT attempt authentication or exploitation.
Do NOT read from or write to any other module.
Do NOT modify or update any section outside this module.
Do NOT store or reuse results globally.

{JSON_ONLY_RULE}"""
