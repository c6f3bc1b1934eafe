"""Route modules. Each exposes an APIRouter named `router`."""
