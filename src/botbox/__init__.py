"""botbox sync engine.

Keeps a project's locally installed managed artifacts (workflow docs, loop
scripts, reviewer prompts, agent hooks) in step with the versions bundled in
this package, and migrates `.botbox.json` across schema revisions.
"""
