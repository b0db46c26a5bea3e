# run_api.py
"""
Local development launcher for the Beaver API.
Equivalent to: `uvicorn beaver.api:create_app --factory --reload --host 0.0.0.0 --port 8000`
"""

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "beaver.api:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
