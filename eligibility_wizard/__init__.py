"""
Scheme Eligibility Wizard

Guides a user through a scheme's eligibility questionnaire, one question at a
time, and produces an eligible / ineligible / needs-review determination.
"""

__version__ = "1.0.0"
__author__ = "Government Schemes Team"
__description__ = "Decision-tree eligibility wizard for government welfare schemes"
