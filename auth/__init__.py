"""auth/ -- Authentication package for the COVID-19 India portal.

Password verification, session-token issuance and verification, the login
flow and the FastAPI auth gate.

Layer rule: auth/ imports only stdlib + third-party libraries + core/.
It does NOT import from api/ or portal/.
api/ imports from auth/, not the other way around.
"""
