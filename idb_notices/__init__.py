# idb_notices/__init__.py
"""IDB procurement notices exporter (Power BI embed -> normalized JSON)."""
