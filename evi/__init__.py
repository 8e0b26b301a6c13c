"""
Earned Visibility Index (EVI) Engine

Deterministic scoring core that:
1. Blends Visibility, Authority and Momentum driver scores into one index
2. Classifies the index into a status band and a trend direction
3. Builds deltas, a 7-point sparkline and an overall confidence
4. Forecasts the index under hypothetical driver scenarios
5. Self-validates its formula constants for CI guardrails
"""

__version__ = "0.1.0"
