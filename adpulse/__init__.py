"""AdPulse — marketing performance dashboard backend."""
