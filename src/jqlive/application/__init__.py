"""Application layer - suggestion engine, result processing and the query pipeline."""
