"""
QA automation harness.

Page-object UI tests (Playwright) and REST API tests (httpx), run by pytest.
The package stays importable so `run_tests.py`, IDEs and CI can resolve
fixtures and framework modules.
"""
