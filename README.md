# aicommit

Generate commit messages for your staged changes with an AI model.
`aic` reads `git diff --staged`, sends it to Claude, OpenAI or Gemini and
prints a commit message, which it can also commit for you.

## Installation

```
pip install aicommit
```

## Setting up

Choose a platform and model, then enter your API key:

```
aic config --api
```

Platforms and models are picked from numbered menus; pressing Enter
picks the first entry.

Other configuration commands:

```
aic config --show       # show the current configuration
aic config --language   # choose Japanese, English or Chinese messages
aic config --prompt     # write a custom system prompt in a small editor
```

Running `aic config` with no options starts the API setup.
`--show` reports the language, platform and model, and whether each API
key and the custom prompt are set, without printing their values.

The configuration is stored as JSON in
`~/.config/ai_commit_cli/config.json`. If that file is missing or cannot
be parsed, the defaults are used: Claude with `claude-3-opus-20240229`,
and Japanese messages.

An API key in the environment takes precedence over the stored one:

| Platform | Variable          |
|----------|-------------------|
| Claude   | `CLAUDE_API_KEY`  |
| OpenAI   | `OPENAI_API_KEY`  |
| Gemini   | `GEMINI_API_KEY`  |

On start, `aic` also loads a `.env` file as found by python-dotenv's
default search. The service endpoints can be redirected with
`ANTHROPIC_API_BASE`, `OPENAI_API_BASE` and `GEMINI_API_BASE`.

## Usage

Stage your changes, then:

```
aic            # print a suggested commit message
aic --commit   # generate the message and commit with it
aic --version  # show the installed version
```

Without `--commit`, `aic` prints a ready-made `git commit -m "..."` line
with the message's double quotes escaped. If nothing is staged it says so
and stops.

When a custom prompt is set it replaces the built-in system prompt; the
request itself is still written in the configured language.

On failure (git errors, a missing API key, an error from the AI service)
`aic` prints `Error: ...` to standard error and exits with status 1.

## The prompt editor

`aic config --prompt` opens a small full-screen editor holding the
current custom prompt. Arrow keys move the cursor, Enter splits the line
and Backspace deletes or joins lines. Ctrl+S or Esc closes the editor;
either way the text, with trailing whitespace removed, is stored as the
custom prompt.

## Using it from Python

```python
from aicommit.config import Config
from aicommit.cli import generate_commit_message

config = Config.load()
print(generate_commit_message("diff --git a/x b/x ...", config))
```

`aicommit.providers` has `call_claude`, `call_openai` and `call_gemini`,
each taking an API key, a model, a system prompt and a user prompt and
returning the reply's text; they raise `ApiError` when the service fails
or answers in an unexpected form.

## Development

```
pip install -e ".[test]"
pytest
```