import sys
import time
from pathlib import Path

import requests

BASE_URL = "http://127.0.0.1:8080"


def log(msg, status="INFO"):
    print(f"[{status}] {msg}")


def test_health():
    try:
        r = requests.get(f"{BASE_URL}/api/health", timeout=5)
        if r.status_code == 200 and r.json().get("status") == "ok":
            log("Health check: PASS", "SUCCESS")
            return True
        log(f"Health check: FAIL (Status {r.status_code})", "ERROR")
        return False
    except requests.RequestException as e:
        log(f"Health check: FAIL ({e})", "ERROR")
        return False


def test_rejects_unsupported_type():
    try:
        files = {"file": ("notes.txt", b"1) What?\nA) yes", "text/plain")}
        r = requests.post(f"{BASE_URL}/api/upload", files=files, timeout=10)
        if r.status_code == 415:
            log("Unsupported type rejected: PASS", "SUCCESS")
            return True
        log(f"Unsupported type rejected: FAIL (Status {r.status_code})", "ERROR")
        return False
    except requests.RequestException as e:
        log(f"Unsupported type rejected: FAIL ({e})", "ERROR")
        return False


def test_upload(path: Path):
    try:
        with open(path, "rb") as fh:
            r = requests.post(f"{BASE_URL}/api/upload", files={"file": (path.name, fh)}, timeout=60)
        if r.status_code != 200:
            log(f"Upload '{path.name}': FAIL (Status {r.status_code}: {r.text[:200]})", "ERROR")
            return False
        data = r.json()
        answered = sum(1 for q in data["questions"] if q["correct_answer"])
        log(f"Upload '{path.name}': PASS ({data['question_count']} questions, {answered} with answers)", "SUCCESS")
        return True
    except requests.RequestException as e:
        log(f"Upload '{path.name}': FAIL ({e})", "ERROR")
        return False


def run_tests(paths):
    log("Starting smoke tests...", "INFO")

    try:
        requests.get(BASE_URL, timeout=2)
    except requests.RequestException:
        log("Server not reachable immediately, waiting 2s...", "WARN")
        time.sleep(2)

    results = [test_health(), test_rejects_unsupported_type()]
    results.extend(test_upload(p) for p in paths)

    if all(results):
        log("ALL SMOKE TESTS PASSED", "SUCCESS")
        sys.exit(0)
    else:
        log("SOME SMOKE TESTS FAILED", "ERROR")
        sys.exit(1)


if __name__ == "__main__":
    run_tests([Path(a) for a in sys.argv[1:]])
