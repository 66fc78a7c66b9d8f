# leakscan

Building blocks for detecting secrets (API keys, tokens, webhook URLs) in
source code and configuration files: rules, allowlists, TOML configuration,
regex generators for new rules, a set of ready-made rules and a stop-word
list.

leakscan needs Python 3.11 or later and has no runtime dependencies.

## Modules

- `leakscan.rule`: `Rule` (rule id, description, content regex and/or path
  regex, entropy threshold, secret group, tags, keywords, allowlists) and
  `ConfigError`. `Rule.validate()` raises `ConfigError` for a missing id, for
  a rule with neither regex nor path, and for a secret group larger than the
  number of groups in the regex.
- `leakscan.allowlist`: `Allowlist`, `MatchCondition` (`OR`, `AND`) and
  `any_regex_match(text, regexes)`.
- `leakscan.config`: `Config`, `Extend`, `translate(data, extend_depth)` and
  `load_config(path)`.
- `leakscan.generate` and `leakscan.patterns`: helpers for writing rule
  regexes and sample lines that exercise them.
- `leakscan.rules`: ready-made rules for Microsoft Teams webhooks, Travis CI,
  Trello, Twilio, Twitch, Twitter, Typeform, Yandex and Zendesk.
- `leakscan.stopwords`: `DEFAULT_STOP_WORDS`, common words that mark a
  candidate secret as a likely false positive.
- `leakscan.platform`: `Platform` and `platform_from_string`.
- `leakscan.units`: `bytes_convert` and `format_duration`.

## Loading a configuration

A configuration file is TOML. Keys match regardless of case:

```toml
title = "my rules"

[extend]
path = "base.toml"
disabledRules = ["generic-api-key"]

[[rules]]
id = "internal-service-token"
description = "Token for the internal service"
regex = '''svc_[a-z0-9]{32}'''
keywords = ["svc_"]

  [[rules.allowlists]]
  condition = "or"
  paths = ['''^tests/''']
  stopwords = ["example"]

[allowlist]
paths = ['''\.lock$''']
```

```python
from leakscan.config import load_config

config = load_config("leakscan.toml")
for rule in config.get_ordered_rules():
    print(rule.rule_id, rule.description)
```

`translate(data, 0)` builds a `Config` from an already parsed document.
Rule keywords are lower-cased and collected into `Config.keywords`. A rule
allowlist's `condition` may be `and`/`&&` or `or`/`||` (the default), and its
`regexTarget` may be `secret` (the default), `match` or `line`; anything else,
an empty allowlist, a bad regex, or an old-style `[rules.allowlist]` table
used together with `[[rules.allowlists]]` raises `ConfigError`.

`[extend] path` names another TOML file whose rules are merged in, up to two
levels deep. Rules listed in `disabledRules` are skipped. `Config.extend(other)`
performs the merge directly: rules missing from the current configuration are
added, rules present in both are merged (the current rule's non-empty fields
win; tags, keywords and allowlists are combined), the other configuration's
global allowlist commits, paths and regexes are appended, and the rule order
is sorted.

## Allowlists

```python
import re
from leakscan.allowlist import Allowlist

allowlist = Allowlist(paths=[re.compile(r"^docs/")], stop_words=["example"])
allowlist.validate()

allowlist.path_allowed("docs/setup.md")         # True
allowlist.contains_stop_word("my_example_key")  # "example"
allowlist.commit_allowed("abc123")              # None
```

`commit_allowed` returns the commit when it is listed and `None` otherwise;
`contains_stop_word` returns the first stop word found (ignoring case) or
`None`. `validate()` raises `ConfigError` for an allowlist with no checks and
removes duplicate commits and stop words, keeping their order.

## Writing rules

```python
from leakscan.generate import generate_semi_generic_regex, generate_sample_secrets
from leakscan.patterns import alpha_numeric

regex = generate_semi_generic_regex(["acme"], alpha_numeric("32"), True)
for line in generate_sample_secrets("acme", "token"):
    print(line)
```

The generated regex matches a secret assigned to a name containing one of the
identifiers; group 1 holds the secret. `generate_unique_token_regex` does the
same for tokens with a distinctive shape that need no identifier, and
`merge_regexps` joins compiled patterns or pattern strings into one
alternation. `generate_sample_secret` gives a single `name_api_token = "..."`
line.

The bundled rules are plain functions returning a `Rule`. Each one checks
itself against randomly generated sample secrets and raises `ConfigError` if
its regex misses one:

```python
from leakscan.rules import twilio, teams_webhook

rule = twilio()
print(rule.rule_id, rule.regex.pattern)
```

## Helpers

```python
from datetime import timedelta
from leakscan.units import bytes_convert, format_duration
from leakscan.platform import platform_from_string

bytes_convert(1500)                          # "1.50 KB"
format_duration(timedelta(seconds=1.5))      # "1.5s"
platform_from_string("GitHub")               # Platform.GITHUB
```

`platform_from_string` accepts `""`, `unknown`, `none`, `github` and `gitlab`
in any case and raises `ValueError` for anything else. `format_duration` also
takes a number of nanoseconds.

## What leakscan does not do

leakscan has no scanner: it does not walk directories, read git history or
standard input, compute entropy, or write reports, and it has no command-line
tool. It ships no built-in default configuration, so `[extend] useDefault =
true` raises `ConfigError`, and `[extend] url` is read but not followed.

## Tests

The test suite uses pytest, installed with the `test` extra.