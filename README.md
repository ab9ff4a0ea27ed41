# fontsite

This package is the HTTP layer of a personal portfolio and article archive. A handler takes a `Request` and returns a `Response`, and it calls a service object that you supply to do the actual work.

## Modules

- `fontsite.problem` defines `Problem`, an exception that carries a problem-details document (`application/problem+json`).
  - `add(key, value)` attaches an extension member. If a key is added more than once, its values are collected into a list.
  - `to_dict()` and `to_json()` render the document and leave out empty members.
  - These constructors build common problems: `new_internal()` (500), `new_missing_parameter(name)` (400), `new_unparsable_value(...)` (422) and `new_value_out_of_range(...)` (422).
- `fontsite.web` provides the `Request` dataclass (`query`, `form`, `body`) and the `Response` dataclass (`status`, `headers`, `body`), plus three helpers:
  - `json_response(status, payload)` writes compact JSON. Dataclasses, UUIDs, dates, enums, sets and tuples are handled, and the characters `<`, `>` and `&` are escaped.
  - `problem_response(problem)` renders a `Problem` as a response.
  - `no_content()` returns an empty 204 response.
- `fontsite.transfer` holds the dataclasses that handlers pass to services: `Publication`, `ArticleFilter`, `ArticleCreation`, `ArticleRevision`, `ExperienceCreation`, `ExperienceUpdate` and `MeUpdate`.
  - `ArticleCreation`, `ArticleRevision`, `ExperienceCreation` and `ExperienceUpdate` each have a `validate()` method that returns a list of `Failure` tuples.
  - `ArticleCreation` requires `title` and `content`.
  - `ExperienceCreation` requires `starts`, `job_title` and `company`.
  - The other classes have no required fields.
- `fontsite.binding` provides four functions:
  - `bind_post_form(request, target)` fills the fields of a dataclass instance from the form values. Each value is trimmed, then parsed according to the field's type: `str`, `int`, `float` or `bool`.
    - A field's `form` metadata changes which form key is read, and `bits` metadata narrows integers or selects single precision for floats.
    - Values that cannot be parsed, or that do not fit, raise a `Problem`.
  - `validate_struct(obj)` returns the object unchanged if it passes validation. Otherwise it raises a 422 `Problem` whose `errors` member lists the failures.
  - `check(error)` turns an exception into a problem response. A `Problem` keeps its own status; any other exception becomes a 500.
  - `get_article_filter(request)` builds an `ArticleFilter` from the query parameters `search`, `topic`, `page`, `rpp` and `from`.
    - `from` is written as `YEAR/MONTH`.
    - `page` defaults to 1 and `rpp` defaults to 20.
- `fontsite.markup` provides `md2html(md)`, which renders CommonMark with tables, strikethrough and typographic replacements. Links that point off the site are given `target="_blank"`.
- The handlers are:
  - `ArticlesHandler` in `fontsite.articles`
  - `DraftsHandler` in `fontsite.drafts`
  - `PatchesHandler` in `fontsite.patches`
  - `ExperienceHandler` in `fontsite.experience`. Its optional `today` callable sets the end date that `quit` records.
  - `MeHandler` in `fontsite.me`

## Installing

```
pip install .
pip install ".[test]"   # with pytest
```

## Using a handler

```python
from fontsite.articles import ArticlesHandler
from fontsite.web import Request

class Articles:
    def list(self, filter):
        return [{"title": "Hello"}]

handler = ArticlesHandler(Articles())
response = handler.list(Request(query={"page": "2"}))
print(response.status, response.body)   # 200 b'[{"title":"Hello"}]'
```

If a required form parameter is missing, the handler returns a 400 problem that names the parameter, and it does not call the service. If the service raises a `Problem`, that problem is returned with its own status. Any other exception from the service becomes a generic 500 problem.

## What it does not do

- It has no HTTP server and no router. You need to map paths and methods to handler methods yourself.
- It has no services and no storage. Articles, drafts, patches, experience entries and the profile all come from the service objects you pass in.

## Running the tests

```
pytest
```