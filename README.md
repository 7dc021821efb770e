# variantkit

Building blocks for an A/B testing client.

- **Hashing** (`variantkit.hashing`): `hash_unit(unit)` UTF-8 encodes a unit identifier, such as
  a session id or a user id, and returns its MD5 digest as 22 bytes of unpadded base64url text.
  `md5_base64url(data)` does the same for raw bytes. `murmur3_32(key, seed)` returns the unsigned
  32-bit MurmurHash3 of a byte string.
- **Variant assignment** (`variantkit.variant_assigner`): `VariantAssigner` maps a hashed unit
  and an experiment's seeds onto a split. The same unit and seeds always give the same variant.
- **Audience expressions** (`variantkit.jsonexpr`, `variantkit.evaluator`,
  `variantkit.operators`): `evaluate_boolean_expr` evaluates JSON audience rules against a dict
  of attributes. The operators are `and`, `or`, `not`, `null`, `eq`, `gt`, `gte`, `lt`, `lte`,
  `in`, `match`, `var` and `value`.
- **Models and serialization** (`variantkit.models`, `variantkit.serialization`): dataclasses for
  context data and publish events, with JSON conversion in both directions.
- **Transport** (`variantkit.http_client`, `variantkit.providers`, `variantkit.future`): a
  `requests`-based HTTP client that returns `Future` objects, and thin wrappers over any client
  object.
- **Clocks** (`variantkit.clock`): `SystemClockUTC` and `FixedClock`, both with `millis()`.

## Installation

```
pip install variantkit
```

## Assigning a variant

```python
from variantkit.hashing import hash_unit
from variantkit.variant_assigner import VariantAssigner, choose_variant

assigner = VariantAssigner(hash_unit("123456789"))
variant = assigner.assign([0.5, 0.5], seed_hi=0x8015406F, seed_lo=0x7EF49B98)  # 1
```

`choose_variant(split, prob)` returns the index of the first bucket whose cumulative share
exceeds `prob`. If no bucket does, it returns the last index.

## Evaluating an audience

```python
from variantkit.jsonexpr import evaluate_boolean_expr

audience = [
    {"gte": [{"var": {"path": "age"}}, {"value": 50}]},
]
evaluate_boolean_expr(audience, {"age": 52, "language": "pt-PT"})  # True
```

A list is an implicit `and`. A mapping names its operator by its first key; an unknown operator
evaluates to `None`, which counts as false. `var` takes a path, either as a string or as
`{"path": ...}`, and uses `/` to step into nested dicts and lists, for example `"e/1/z"`. A
missing variable is `None`.

`match` searches the text for a regular expression. `in` tests membership in a list, a substring
of a string, or a key of a dict.

To use a custom operator table, build an `Evaluator(operators, vars)` directly. Start from
`default_operators()` to get the standard set. `Evaluator` also exposes:

- `compare(lhs, rhs)`, which returns -1, 0, 1 or `None` when the values cannot be compared.
- `boolean_convert`.
- `number_convert` and `string_convert`, which raise `ConversionError` when the value cannot be
  converted.
- `extract_var(path)`.

## Reading context data and writing events

```python
from variantkit.serialization import (
    DefaultContextDataDeserializer,
    DefaultContextEventSerializer,
    DeserializationError,
)

try:
    data = DefaultContextDataDeserializer().deserialize(raw_bytes)
except DeserializationError as exc:
    ...
for experiment in data.experiments:
    print(experiment.name, experiment.split)
```

`deserialize` accepts bytes or text. A JSON `null` gives an empty `ContextData`. Malformed JSON,
or a field of the wrong type, raises `DeserializationError`.

`DefaultContextEventSerializer().serialize(event)` returns compact UTF-8 JSON for a
`PublishEvent`. Some fields are left out when empty:

- An `Attribute` with a `value` of `None` has no `value` key.
- A `GoalAchievement` with no `properties` has no `properties` key.

The serializer orders dict keys inside free-form values, and raises `ValueError` for NaN or
infinity.

`DefaultVariableParser().parse(context, experiment_name, variant_name, config)` returns a
variant's JSON config as a dict, or `None` if the config is not a JSON object.

## HTTP and futures

```python
from variantkit.http_client import DefaultHttpClient, HttpClientConfig

client = DefaultHttpClient(HttpClientConfig(max_retries=3))
response = client.get("https://collector.example.com/context", {"application": "website"}, None).get()
```

`get`, `put` and `post` send requests on a background thread and return a `Future` of the
`requests.Response`.

The client retries in two cases:

- a request error;
- a 502 or 503 status.

It makes up to `max_retries` retries. Each wait starts from `retry_interval` and doubles, capped
at two seconds. `should_retry(response, error)` states that rule. All `HttpClientConfig`
durations are in seconds.

`variantkit.future.call(fn)` runs `fn` in a background thread and returns a `Future`. A `Future`
offers:

- `get(timeout=None)` returns the value or raises the stored error. It raises `TimeoutError` if
  the result is not ready in time.
- `ready()` reports whether a result has been set.
- `set_result(value, error)` stores the first result only, and returns `False` for any later one.
- `listen(callback)` calls `callback(value, error)` at once if the result is ready, otherwise when
  it is set.
- `join(timeout=None)` waits, then calls every registered listener again.

`DefaultContextDataProvider(client).get_context_data()` and
`DefaultContextEventHandler(client).publish(context, event)` pass through to a client object that
offers `get_context_data()` and `publish(event)`.

## What the package does not do

The package does not include the client that sits between the HTTP layer and the providers. No
class turns HTTP responses into context data or posts serialized events to a collector, so
`DefaultContextDataProvider` and `DefaultContextEventHandler` need such an object from you.

It also has no experiment context that ties everything together. That would cover:

- tracking exposures;
- queuing goals and attributes;
- deciding audience eligibility;
- publishing events.

The pieces above are meant to be assembled by the caller.

## Running the tests

```
pip install "variantkit[test]"
pytest
```