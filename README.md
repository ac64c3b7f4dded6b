# freshstock

A small JSON API for a fresh-products warehouse. It exposes sections,
sellers and warehouses under `/api/v1` and is served as a plain WSGI
application, so any WSGI server can host it. It uses nothing outside the
standard library.

## Resources

| Path                                   | Methods                  |
|----------------------------------------|--------------------------|
| `/api/v1/sections`                     | GET, POST                |
| `/api/v1/sections/{id}`                | GET, PATCH, DELETE       |
| `/api/v1/sections/reportProducts`      | GET (optional `?id=`)    |
| `/api/v1/sellers`                      | GET, POST                |
| `/api/v1/sellers/{id}`                 | GET, PATCH, DELETE       |
| `/api/v1/warehouses`                   | GET, POST                |
| `/api/v1/warehouses/{id}`              | GET, PATCH, DELETE       |

A trailing slash makes no difference to matching. Any other path answers
`404` with the message `404 page not found`.

Successful responses carry `{"data": ...}`; a successful delete answers
`204 No Content` with no body. Failures carry `{"code": ..., "message": ...}`,
where `code` is the status phrase in snake case (e.g. `not_found`):

* `400` for an id that is not a whole number; for a section PATCH body
  that cannot be bound; for a seller POST with required fields missing
  (`Bad Request, missing required fields`);
* `404` when the resource does not exist, e.g.
  `The section with id 1 does not exists` or `Id 15 does not exist`;
* `409` on a conflict: a section number, seller `cid` or warehouse code
  already taken, or a seller locality that is not known;
* `422` when a body is malformed, has wrong types or misses required
  fields (other than the cases above);
* `500` for any other service failure.

Section PATCH applies only non-zero fields; temperatures left out of the
body keep their stored values. Seller and warehouse PATCH replace only
the fields that are present.

## Layout

* `freshstock.web` — `Request`, `Response` (with `json()`), and the
  `success` / `error` helpers that build the envelopes.
* `freshstock.models` — `Section`, `ProductsBySection`, `Seller`,
  `Warehouse`, `Product`, `ProductRecord`, each with `to_dict()`.
* `freshstock.requests` — request body classes for sections, sellers,
  warehouses, products, product records, product batches, buyers,
  carries, employees, inbound orders and purchase orders, plus
  `bind_json(cls, body)`, which raises `BindError` or its subclass
  `MissingFieldError`, and `string_to_mysql_date`.
* `freshstock.services` — in-memory `SectionService`, `SellerService`
  and `WarehouseService`, and the errors they raise (`NotFoundError`,
  `AlreadyExistsError`, `InternalError`, `ForeignKeyConstraintError`,
  `BadRequestError`, `BodyValidationError`, all `ServiceError`).
* `freshstock.section_handler`, `freshstock.seller_handler`,
  `freshstock.warehouse_handler` — `SectionHandler`, `SellerHandler`,
  `WarehouseHandler`, which turn a `Request` into a service call and
  its result or error into a `Response`.
* `freshstock.routes` — `Router`, which registers the routes above with
  `map_routes()`, takes extra ones with `add(method, path, handler)`
  (`:name` segments capture path parameters), and answers through
  `dispatch(method, path, query, body)` or the WSGI callable
  `wsgi_app(environ, start_response)`.

## Serving

```python
from wsgiref.simple_server import make_server

from freshstock.routes import Router

router = Router()          # or Router(section_service=..., seller_service=..., warehouse_service=...)
router.map_routes()
make_server("localhost", 8080, router.wsgi_app).serve_forever()
```

Any object with the same methods as the in-memory services can be passed
to `Router`. In tests, `dispatch` returns a `Response`; its `status` and
`body` hold the result and `json()` gives the serialised body.

## What it does not do

* Storage is in memory only; nothing is persisted between runs and
  there is no database layer.
* There is no command-line entry point; you start a WSGI server yourself.
* Only sections, sellers and warehouses have handlers and routes. The
  request classes for products, buyers, employees and the other
  resources are bound and validated, but no endpoints serve them.
* There is no API documentation endpoint.