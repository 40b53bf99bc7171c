"""ShuffleCast - shuffle playback core for podcast feeds."""

__version__ = "0.1.0"
