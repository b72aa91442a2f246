"""
Brand Savings Calculator.

Estimates wasted spend on branded search campaigns from a short
questionnaire and hands qualified leads to the record store and the
automation webhook.

Packages:
- brand_savings: Estimator, settings, sinks, web app, CLI
- intake: Questionnaire state machine and /intake router
"""

__version__ = "1.0.0"
