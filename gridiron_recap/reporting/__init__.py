"""
gridiron_recap.reporting — summary statistics, terminal formatting, export.

Modules:
  summary    — SpreadSummary dataclass + summarize_spreads().
  formatters — ASCII terminal formatters for Typer CLI commands.
  export     — CSV/JSON flat-file writers for the derived table and picks.
  chart      — One matplotlib bar chart of games per spread category.
"""
