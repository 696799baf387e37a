"""Google Photos library audits: out-of-album photos and private-album leaks."""
