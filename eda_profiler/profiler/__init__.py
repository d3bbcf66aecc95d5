"""
Profiling engine.

Modules
-------
field_classifier
    Numeric vs categorical type inference from a sample window.
missingness
    Missing / empty / sentinel counts and treatment tiers.
descriptive
    Count, mean, median, min, max per numeric field.
correlation
    Pairwise Pearson correlation, thresholded and ranked.
categorical
    Top-N frequency distributions per categorical field.
builder
    Orchestrates the above into one immutable ``Profile``.
source_readers
    pandas-based file ingestion into a ``Dataset``.
"""
