# src/browse/scanner.py
"""Rule-based URL threat classifier.

A stand-in for a real scanner: the URL string is matched against an ordered
list of substrings and the first hit decides the verdict. Nothing is fetched.
"""
from typing import NamedTuple, Optional
from browse.models import ThreatLevel


class ThreatRule(NamedTuple):
    pattern: str
    threat_type: str
    description: str
    confidence: int


class ThreatDetails(NamedTuple):
    type: str
    description: str
    confidence: int

    @property
    def confidence_label(self) -> str:
        return f"{self.confidence}%"

    def as_dict(self) -> dict:
        return {"type": self.type, "description": self.description, "confidence": self.confidence_label}


class Verdict(NamedTuple):
    level: ThreatLevel
    details: Optional[ThreatDetails] = None

    @property
    def is_danger(self) -> bool:
        return self.level == ThreatLevel.danger


_MALWARE_DESCRIPTION = "This URL contains suspicious patterns commonly associated with malware distribution."

# Order matters: first match wins.
THREAT_RULES = (
    ThreatRule("eval(", "Suspicious JavaScript",
               "The URL embeds a JavaScript eval call, a common way to run obfuscated code.", 92),
    ThreatRule("document.write", "Script Injection",
               "The URL tries to inject markup through document.write.", 85),
    ThreatRule("innerHTML", "DOM Manipulation",
               "The URL references innerHTML, often used in cross-site scripting payloads.", 80),
    ThreatRule(".ru/", "High-Risk Domain",
               "The domain belongs to a zone frequently used to host malicious content.", 70),
    ThreatRule("bit.ly", "URL Shortener",
               "Shortened links hide their real destination.", 60),
    ThreatRule("malware", "Potential Malware Detected", _MALWARE_DESCRIPTION, 87),
    ThreatRule("phishing", "Potential Malware Detected", _MALWARE_DESCRIPTION, 87),
    ThreatRule("virus", "Potential Malware Detected", _MALWARE_DESCRIPTION, 87),
)


def scan_url(url: str) -> Verdict:
    """Classify a URL. Pure and deterministic."""
    for rule in THREAT_RULES:
        if rule.pattern in url:
            return Verdict(ThreatLevel.danger, ThreatDetails(rule.threat_type, rule.description, rule.confidence))
    return Verdict(ThreatLevel.safe)
