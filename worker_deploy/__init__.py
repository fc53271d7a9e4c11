"""Upload and deploy Cloudflare Worker versions from GitHub Actions."""

__version__ = "0.1.0"
