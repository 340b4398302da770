"""simsurvey: simulated-AI survey backend."""
