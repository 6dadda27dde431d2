"""Core pipeline for prefixcalc: IR, errors, options, and the expression language."""
