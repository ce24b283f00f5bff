"""Core domain package for decode-sourcemap.

Core contains extraction, artifact resolution, sourcemap translation and
origin classification without any console, config-file or prompt code, so the
same logic backs the CLI, the HTML report and the tests.
"""
