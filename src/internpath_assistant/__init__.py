"""internpath_assistant: assistente conversacional e setup de alertas SMS."""

__version__ = "0.1.0"
