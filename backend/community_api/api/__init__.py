"""HTTP layer: routers, request pipeline helpers and the error dispatcher."""
