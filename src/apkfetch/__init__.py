"""apkfetch: resolve and download app releases from an HTML software catalog."""
