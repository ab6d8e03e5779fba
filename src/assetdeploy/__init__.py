"""assetdeploy - static asset materialization layer.

Resolves logical asset names to canonical relative paths and publishes
staged output into a public serving tree:
- PathResolver maps names and deployment parameters to relative paths
- StagingStore / PublicStore wrap one root directory each
- Publisher commits staged files by copy or symlink with atomic replace
- MaterializationService is the public facade
"""

__version__ = "0.1.0"
