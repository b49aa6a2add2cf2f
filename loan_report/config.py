"""
Fixed assumptions for the mortgage affordability simulator.

Monetary values are in the household's own unit (the UI works in 萬元).
Rates are expressed as fractions unless the name ends with ``_PCT``.
"""

# ── Simulation horizon ───────────────────────────────────────────────
SIMULATION_YEARS = 10
SALARY_GROWTH_LAST_YEAR = 5      # salary compounds in years 2..5 only
LIVING_INFLATION_RATE = 0.03     # applied from year 2 onwards

# ── One-time life event ──────────────────────────────────────────────
DEFAULT_EVENT_YEAR = 3
EVENT_INCOME_LOSS = 0.05         # share of that year's salary

# ── Burden ratio bands (percent of monthly salary) ───────────────────
BURDEN_BEST_BELOW_PCT = 30.0
BURDEN_HEALTHY_MAX_PCT = 33.0
BURDEN_MODERATE_MAX_PCT = 40.0

# ── Persistence ──────────────────────────────────────────────────────
STORAGE_PATH = "user_data/loan_report.json"
STORAGE_KEY = "loan-report-params"
