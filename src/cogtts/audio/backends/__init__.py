"""Hardware playback backends."""
