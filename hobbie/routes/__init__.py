"""Flask blueprints exposing the hobby service over HTTP."""
