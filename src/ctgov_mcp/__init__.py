"""MCP server exposing the ClinicalTrials.gov REST API as agent tools."""

__version__ = "0.3.0"
