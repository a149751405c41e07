"""
Recommendation selection: which close games are worth a rewatch.

Modules
-------
ranker : select_recommendations() — filter, sort, top-N and projection.
         Pure pandas, no I/O.
"""
