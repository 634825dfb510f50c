# telegafeed

A backend for a personal news feed. Users subscribe to RSS, Atom and RDF
sources; the feed is refreshed from those sources, and each user can star
or mark articles as read, ask for a summary of an article and get a daily
digest of what arrived today.

## What is inside

- `telegafeed.entities` – the data model: `Article`, `Feed`, `FeedSource`,
  `Summary`, `User`, the `FeedType` values (`rss`, `atom`, `rdf`) and the
  partial updates `ArticlePatch` and `FeedSourcePatch` built from `Option`
  values (`empty_option()`, `option_from(value)`, `option_from_nilable(value)`).
- `telegafeed.rss`, `telegafeed.atom`, `telegafeed.rdf` – parsers for the
  three feed formats (`parse_rss`, `parse_atom`, `parse_rdf`) plus helpers
  that choose an article link or preview image (`get_preview_url`,
  `get_link`, `get_preview_link`).
- `telegafeed.feedutil` – `parse_feed_date`, which accepts the date layouts
  seen in real feeds and falls back to the current UTC time, and `read_xml`.
- `telegafeed.feed_providers` – `RssProvider`, `AtomProvider` and
  `RdfProvider`, which recognise a document's format (`check_type`) and turn
  a source into articles (`fetch_articles`).
- `telegafeed.llm_providers` – `EchoLlmProvider` and `StubLlmProvider`,
  simple summary and digest generators for development and tests.
- Services: `DefaultFetchService`, `DefaultFeedSourcesService`,
  `DefaultLlmService` and `DefaultFeedService`.
- `telegafeed.api.create_app` – a Flask application exposing the HTTP API.
- `telegafeed.abstractions` – the interfaces for storage (`UsersRepository`,
  `FeedRepository`, `FeedSourceRepository`, `DigestsRepository`,
  `SummariesRepository`) that you implement for your database.

## Parsing a feed

```python
from telegafeed.rss import parse_rss, get_preview_url

with open("news.rss", "rb") as handle:
    feed = parse_rss(handle)

for item in feed.channel.items:
    print(item.title, item.link, get_preview_url(item.enclosures))
```

`parse_rss`, `parse_atom` and `parse_rdf` raise `FeedParseError` when the
document is not of the expected format, and `EmptyDocumentError` when it is
empty.

## Wiring the application

Storage is yours to provide: implement the repository interfaces from
`telegafeed.abstractions`, then assemble the services and the Flask app.

```python
from telegafeed.httputil import UrllibHttpClient
from telegafeed.feed_providers import RssProvider, AtomProvider, RdfProvider
from telegafeed.llm_providers import EchoLlmProvider
from telegafeed.fetch_service import DefaultFetchService
from telegafeed.feed_sources_service import DefaultFeedSourcesService
from telegafeed.llm_service import DefaultLlmService
from telegafeed.feed_service import DefaultFeedService
from telegafeed.api import create_app

users, feed, sources, digests, summaries = my_repositories()  # your storage

client = UrllibHttpClient(timeout=10)
providers = {
    "rss": RssProvider(client),
    "atom": AtomProvider(client),
    "rdf": RdfProvider(client),
}

fetch_service = DefaultFetchService(providers, client)
feed_sources_service = DefaultFeedSourcesService(fetch_service, sources)
llm_service = DefaultLlmService(digests, summaries, feed, EchoLlmProvider())
feed_service = DefaultFeedService(llm_service, fetch_service, feed, sources, users)

app = create_app(feed_service, feed_sources_service, llm_service, users)
app.run(port=8080)
```

## HTTP API

Every route except the feed refresh needs an `X-UserId` header naming an
existing user; a missing header or unknown user gives `401`.

| Method | Path                          | Purpose                                   |
|--------|-------------------------------|-------------------------------------------|
| GET    | `/api/feed`                   | articles and today's digest               |
| GET    | `/api/feed/digest`            | today's digest                            |
| PATCH  | `/api/articles/<id>`          | set `starred` and/or `read`               |
| GET    | `/api/articles/<id>/summary`  | summary of one article                    |
| GET    | `/api/feed-sources`           | the user's sources                        |
| POST   | `/api/feed-sources`           | add a source: `name`, `feed_url`          |
| GET    | `/api/feed-sources/<id>`      | one source                                |
| PATCH  | `/api/feed-sources/<id>`      | change `name` and/or `disabled`           |
| DELETE | `/api/feed-sources/<id>`      | unsubscribe                               |
| POST   | `/api/execute/update-feed`    | fetch new articles from every source      |

Malformed ids or bodies give `400`; failures inside a service give `500`,
except a source that cannot be found, which gives `404`.