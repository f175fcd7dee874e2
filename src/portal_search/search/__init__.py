"""
In-memory search engine package.

This package provides a pure-Python search pipeline over record collections:
- analyzers: Whitespace tokenizer and token filters
- fields: Dot-path field access and text rendering
- fuzzy: Edit-distance matching
- scorer: Boosted additive relevance scoring
- filters: Literal, membership and operator predicates
- facets: Distinct-value aggregation
- pagination: Stable sort and offset/limit slicing
- suggestions: Prefix suggestions from the corpus
- engine: The pipeline tying the stages together
"""
