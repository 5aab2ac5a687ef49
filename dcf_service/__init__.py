"""
DCF Service
===========

Glue around ``dcf_engine``: company data connectors, the valuation service,
the FastAPI application and a small CLI.
"""
