"""Ghost - self_check.py

Deterministic compile checks against a running node's /compile endpoint.
These are light sanity checks, not full tests.
"""

from dataclasses import dataclass

import requests


@dataclass
class SelfCheckCase:
    term: dict
    must_contain: list[str]


SELF_CHECKS: list[SelfCheckCase] = [
    SelfCheckCase(
        term={"kind": "word", "text": "hello"},
        must_contain=["WordInSentence", "ReferenceLink", "hello"],
    ),
    SelfCheckCase(
        term={"kind": "lemma", "text": "run"},
        must_contain=["LemmaLink", "run"],
    ),
    SelfCheckCase(
        term={"kind": "wildcard", "lower": 0, "upper": -1},
        must_contain=["GlobNode"],
    ),
    SelfCheckCase(
        term={"kind": "negation", "terms": [{"kind": "word", "text": "no"}]},
        must_contain=["ghost-negation?"],
    ),
]


def run_self_checks(base_url: str, timeout: float = 3.0) -> list[dict]:
    """Compile each case on the node and report pass/fail."""
    results: list[dict] = []
    for case in SELF_CHECKS:
        try:
            resp = requests.post(
                f"{base_url}/compile",
                json={"term": case.term},
                timeout=timeout,
            )
            resp.raise_for_status()
            body = resp.text
            missing = [kw for kw in case.must_contain if kw not in body]
            results.append(
                {
                    "term": case.term.get("kind"),
                    "ok": not missing,
                    "missing_keywords": missing,
                }
            )
        except Exception as e:
            results.append(
                {
                    "term": case.term.get("kind"),
                    "ok": False,
                    "error": str(e),
                }
            )
    return results
