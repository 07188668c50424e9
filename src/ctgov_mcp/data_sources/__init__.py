"""HTTP clients for ClinicalTrials.gov."""
