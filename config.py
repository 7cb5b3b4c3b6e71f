# config.py

import os
from dotenv import load_dotenv

load_dotenv()

# --- External services ---
IP_API_URL = os.getenv("IP_API_URL", "http://ip-api.com/json").rstrip("/")
IP_API_FIELDS = "status,message,query,city,regionName,zip,timezone,isp,lat,lon"
DOH_URL = os.getenv("DOH_URL", "https://dns.google/resolve")
TILE_URL = os.getenv("TILE_URL", "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png")
TILE_ATTRIBUTION = os.getenv("TILE_ATTRIBUTION", "&copy; OpenStreetMap contributors")

# Optional: marker labels fall back to the location text without it
OPENCAGE_API_KEY = os.getenv("OPENCAGE_API_KEY")

HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "5"))
MAP_ZOOM = int(os.getenv("MAP_ZOOM", "15"))

# --- Server ---
PORT = int(os.getenv("PORT", "5000"))
DEBUG = os.getenv("FLASK_DEBUG", "0") == "1"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
