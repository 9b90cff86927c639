"""Core: settings, constants, lifespan, exception handlers, rate limiter."""
