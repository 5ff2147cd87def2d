"""Building blocks for compare_pdf: regions, page selection, rendering, pixel diff, reports."""
