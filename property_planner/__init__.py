"""
Property Planner - Source Package

Scenario engine for a personal property purchase planner: users describe
a purchase as a named scenario and compare multi-year projections.

DESIGN PRINCIPLES:
1. Store mutations are synchronous and atomic
2. Projections are always derived, never edited
3. Validation reports, it never corrects
4. Persistence is best effort and never blocks startup
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Property Planner Team"
