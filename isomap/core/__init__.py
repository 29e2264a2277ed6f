# -----------------------------------------------------------------------------
# CORE LAYER
# -----------------------------------------------------------------------------
# The run pipeline:
# - config: Environment settings (.env aware)
# - log: Severity-tagged diagnostics on stderr
# - resolver: One isolated bash process per version key
# - builder: Sequential resolution and JSON assembly
# - lifecycle: fetch -> build -> write -> cleanup
#
# Import submodules directly (isomap.core.lifecycle, ...); infra depends on
# config and log, so nothing is re-exported here.
# -----------------------------------------------------------------------------
