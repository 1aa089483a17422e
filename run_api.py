#!/usr/bin/env python3
"""
Simple script to run the Capacity Planning API server.
"""

import uvicorn
from capacity_planning.api.main import app

if __name__ == "__main__":
    print("Starting Capacity Planning API...")
    print("API will be available at: http://localhost:8000")
    print("Interactive docs at: http://localhost:8000/docs")
    
    uvicorn.run(
        app, 
        host="0.0.0.0", 
        port=8000,
        log_level="info"
    )
