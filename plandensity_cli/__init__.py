"""
plandensity CLI - Command-line interface for plan density analysis.

Usage:
    plandensity analyze config/analysis.yaml config/markers.yaml
    plandensity analyze config/analysis.yaml markers.json --image out.png --json out.json
    plandensity reference-config > analysis.yaml
"""

__version__ = "1.0.0"
