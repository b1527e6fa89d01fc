"""Core (UI-agnostic) dashboard logic.

This package contains:
- sheet access (Google Sheets -> header-keyed rows)
- row normalization, date parsing and status classification
- issue filters and page compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
