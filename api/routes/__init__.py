"""api/routes/ -- HTTP route modules, one APIRouter per resource."""
