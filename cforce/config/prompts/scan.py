"""
Vulnerability scan module prompt.
"""

from cforce.config.constants import PASSIVE_DISCLAIMER, Severity, VulnerabilityType
from cforce.config.prompts.common import (
    JSON_ONLY_RULE,
    build_isolation_directive,
    format_allowed,
)


def build_scan_prompt(target: str) -> str:
    """Build the instruction for the passive website security and vulnerability scan."""
    severities = format_allowed([s.value for s in Severity])
    vuln_types = format_allowed([t.value for t in VulnerabilityType])

    return f"""{build_isolation_directive("WEBSITE FULL SECURITY & VULNERABILITY SCAN")}

Target: {target}

Scope:
Strictly passive, OSINT-based, and threat-intelligence-driven analysis.
No active scanning. No exploitation. No intrusive actions.

Tasks:
- Identify domain and resolved IP address(es)
- Detect hosting provider, ISP, country, ASN, and IP type
- Analyze web server type and publicly visible HTTP headers
- Check TLS/SSL presence and high-level configuration
- Identify CMS, frameworks, libraries, platforms, and technology stack
- Estimate commonly exposed ports and related services (no active scan)
- Detect WAF/CDN and security headers

Comprehensive Vulnerability Intelligence:
- Enumerate ALL publicly known vulnerabilities related to detected technologies
- Cover web server, CMS, plugins, frameworks, libraries, TLS, and common services
- Reference relevant CVEs and vulnerability advisories when applicable
- Classify vulnerabilities by category ({vuln_types})
- Include CVSS score or severity level if publicly available
- Provide high-level exploitation description (conceptual only, non-operational)
- Provide detailed remediation, mitigation, and hardening recommendations
- Identify if vulnerabilities are likely mitigated by WAF/CDN or configuration
- Use only public vulnerability intelligence sources

OUTPUT FORMAT (STRICT JSON ONLY):
{{
  "target": "{target}",
  "serverIp": "RESOLVED_IP",
  "status": "EXECUTIVE_SUMMARY_OF_RISK (e.g., CRITICAL_EXPOSURE, STABLE, etc.)",
  "exposureSummary": "Narrative executive summary and overall risk posture.",
  "riskAssessment": "Final detailed risk assessment based on findings.",
  "disclaimer": "{PASSIVE_DISCLAIMER}",
  "technicalProfile": {{
    "hosting": "...",
    "isp": "...",
    "asn": "...",
    "server": "...",
    "techStack": ["...", "..."],
    "tlsConfig": "...",
    "waf": "..."
  }},
  "openPorts": [
    {{
      "port": 80,
      "service": "http",
      "version": "Detected Version",
      "info": "Technical notes"
    }}
  ],
  "vulnerabilities": [
    {{
      "id": "CVE-YYYY-XXXX",
      "title": "Technical Name of Finding",
      "type": "{vuln_types}",
      "severity": "{severities}",
      "cvss": "Numeric Score",
      "affectedComponent": "CMS Plugin / Library / etc.",
      "description": "Technical description of the vulnerability.",
      "exploitInfo": "High-level conceptual exploitation overview.",
      "remediation": "Detailed remediation guidance.",
      "mitigatedByWaf": "Yes/No/Likely"
    }}
  ],
  "hardeningRecommendations": [
    "Specific technical recommendation 1",
    "Specific technical recommendation 2"
  ]
}}

RESTRICTIONS:
Do NOT perform active scanning, probing, or enumeration.
Do NOT provide exploit code, payloads, or step-by-step attack instructions.
"severity" MUST be one of: {severities}.
"type" MUST be one of: {vuln_types}.

{JSON_ONLY_RULE}"""
