"""portal/ -- State and district records for the COVID-19 India portal.

Layer rule: portal/ imports only stdlib + third-party libraries + core/.
It does NOT import from api/ or auth/.
"""
