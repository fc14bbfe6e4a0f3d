"""Inject and remove the Sentry debug symbol upload task in Unity's exported Gradle projects."""

__version__ = "0.1.0"
