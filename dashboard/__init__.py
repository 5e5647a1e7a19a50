"""Stock dashboard report-rendering pipeline."""
