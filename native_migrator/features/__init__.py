"""Migration features outside the native platform projects."""
