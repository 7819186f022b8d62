"""Repository scanning: context document discovery and package.json manifests."""
