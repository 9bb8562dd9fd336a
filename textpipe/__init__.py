"""textpipe - command-line host for textpipe-core pipelines."""
