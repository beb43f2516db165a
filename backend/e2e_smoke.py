"""
End-to-end smoke test for a running Security Report Service.
Start the server first (`secreport` or `python -m secreport`), then run this
script. BASE defaults to http://localhost:3001 and can be overridden with
REPORTS_BASE_URL.
"""
import os
import sys
import time

import requests

BASE = os.getenv("REPORTS_BASE_URL", "http://localhost:3001")
PASS = "\033[92m✓\033[0m"
FAIL = "\033[91m✗\033[0m"
INFO = "\033[94m→\033[0m"

results = []


def check(name, fn):
    try:
        t = time.time()
        result = fn()
        elapsed = round(time.time() - t, 2)
        print(f"  {PASS} {name} ({elapsed}s)")
        results.append((name, True, elapsed, None))
        return result
    except Exception as e:
        print(f"  {FAIL} {name}: {e}")
        results.append((name, False, 0, str(e)))
        return None


def create_sample():
    r = requests.post(
        f"{BASE}/api/reports",
        json={"riskLevel": "Alto", "companyName": "Acme", "recommendations": ["Enable MFA"]},
        timeout=10,
    )
    assert r.status_code == 201, f"Expected 201, got {r.status_code}"
    d = r.json()
    assert d["success"] is True
    assert d["reportUrl"].endswith(f"/report/{d['reportId']}"), "Share URL does not point at report page"
    return d


def fetch_sample(report_id):
    r = requests.get(f"{BASE}/api/reports/{report_id}", timeout=10)
    r.raise_for_status()
    data = r.json()["report"]["data"]
    assert data["riskLevel"] == "Alto" and data["companyName"] == "Acme", "Document changed in storage"
    return data


def fetch_missing():
    r = requests.get(f"{BASE}/api/reports/does-not-exist", timeout=10)
    assert r.status_code == 404, f"Expected 404, got {r.status_code}"
    assert r.json() == {"success": False, "error": "Report not found"}


def list_contains(report_id):
    r = requests.get(f"{BASE}/api/reports", timeout=10)
    r.raise_for_status()
    d = r.json()
    assert d["count"] == len(d["reports"])
    assert d["reports"][0]["id"] == report_id, "Newest report is not listed first"


print("\n🛡️  Security Report Service — End-to-End Smoke Test")
print("=" * 60)

print(f"\n{INFO} Health & Connectivity")
check("Health check", lambda: requests.get(f"{BASE}/health", timeout=5).raise_for_status())

print(f"\n{INFO} Reports")
created = check("Create report", create_sample)
if created:
    check("Fetch created report", lambda: fetch_sample(created["reportId"]))
    check("Listed newest first", lambda: list_contains(created["reportId"]))
check("Unknown report is 404", fetch_missing)

passed = sum(1 for r in results if r[1])
print("\n" + "=" * 60)
print(f"  {passed}/{len(results)} checks passed")
sys.exit(0 if passed == len(results) else 1)
