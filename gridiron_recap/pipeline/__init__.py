"""
Pipeline stages: fetch → normalize → derive → report.

Modules:
  base         — PipelineStage ABC and StageResult
  fetch        — FetchStage (ESPN page → raw DataFrame)
  normalize    — NormalizeStage (header promotion, type coercion)
  derive       — DeriveStage (result splitting, spread, category labels)
  report       — ReportStage (recommendations, summary, CSV/JSON, chart)
  orchestrator — PipelineOrchestrator running all four in order
"""
