"""
Report schema core.

This package defines:
- Composable field validators with collect-all-errors composition
- The scorable reference-list validator (duplicates + weight sum)
- Disjoint assembly of audit, plugin and report documents
- A separate referential integrity pass and weighted scoring
"""
