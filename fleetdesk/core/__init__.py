"""
Derived-state rules: expiry classification, list filters, assignment
relation, fuel report parsing and aggregation.
"""
