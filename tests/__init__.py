"""minispec test suite.

Folder taxonomy
- unit/     : Isolated, fast checks of a single module/class/function.
- e2e/      : The `minispec` command line driven through click's CliRunner.
- helpers/  : Shared utilities (no tests here).

General guidance
- Keep unit tests fast and deterministic; drive schedulers synchronously.
- e2e tests assert user-observable output and exit codes, not internals.
- Property-based tests live with the layer they exercise and use @pytest.mark.property.
"""
