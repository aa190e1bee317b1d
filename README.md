# tasksmith

tasksmith is a library for Taskfiles, which are YAML documents that define
tasks. It decodes a Taskfile into Python data classes and finds Taskfiles on
disk or on a web server. It can also merge included Taskfiles into a root
Taskfile through a graph of includes, adding a namespace to each included
task.

## Installation

```
pip install tasksmith
```

To run the tests:

```
pip install "tasksmith[test]"
pytest
```

## Decoding

`tasksmith.ast.decoding.decode(kind, text)` parses YAML text and builds
`kind` from the root node. An empty document gives `kind()`. Every AST type
has a `from_node` class method, and each one accepts the short and long forms
of its part of a Taskfile:

- `tasksmith.ast.taskfile.Taskfile`: the whole document. `version` is a
  `packaging.version.Version` and `interval` is in seconds. `parse_duration`
  reads values such as `300ms` or `1h2m3s`.
- `tasksmith.ast.task.Task`: a single command, a list of commands, or a full
  mapping. A mapping may not have both `cmd` and `cmds`.
- `tasksmith.ast.cmd.Cmd`: a shell command, a task call, or a deferred
  command or deferred call.
- `tasksmith.ast.dep.Dep`: a task name or a task call.
- `tasksmith.ast.loop.For`: a source name, an explicit list, or a mapping
  with `var` or `matrix` (only one of the two).
- `tasksmith.ast.glob.Glob`: a pattern, or `exclude:` for a negated pattern.
- `tasksmith.ast.precondition.Precondition`: a command, or `sh`/`msg`. When
  no message is given, a default one is filled in.
- `tasksmith.ast.platform.Platform`: `OS`, `Arch` or `OS/Arch`.
  `Platform.parse` raises `InvalidPlatformError` for anything else.
- `tasksmith.ast.requires.Requires` and `VarWithValidation`.
- `tasksmith.ast.output.Output` and `OutputGroup`.
- `tasksmith.ast.include.Include` and `Includes`.
- `tasksmith.ast.vars.Var` and `Vars`: static values, or `sh`/`ref`
  mappings. Any other mapping is rejected.

```python
from tasksmith.ast.decoding import decode
from tasksmith.ast.taskfile import Taskfile

taskfile = decode(Taskfile, """
version: '3'
tasks:
  build-*:
    cmds:
      - echo building
""")
```

`Tasks.find_matching_tasks(call)` returns the task named by a
`tasksmith.ast.call.Call`. If no task has that name, it returns every task
whose name matches through `*` wildcards, together with the values the
wildcards captured:

```python
from tasksmith.ast.call import Call

for match in taskfile.tasks.find_matching_tasks(Call(task="build-linux")):
    print(match.task.task, match.wildcards)   # build-* ['linux']
```

## Merging included Taskfiles

`tasksmith.ast.graph.TaskfileGraph` holds `TaskfileVertex` objects, one per
URI. You connect them with `add_edge(source, destination, include)`:

- An edge that would close a cycle raises `TaskfileCycleError`.
- `merge()` folds each included Taskfile into the Taskfiles that include it,
  working in reverse topological order, and returns the root.
- `visualize(filename)` writes the graph in DOT format.

```python
from tasksmith.ast.graph import TaskfileGraph, TaskfileVertex
from tasksmith.ast.include import Include

graph = TaskfileGraph()
graph.add_vertex(TaskfileVertex("root", taskfile))
graph.add_vertex(TaskfileVertex("lib", decode(Taskfile, "version: '3'\ntasks:\n  test: echo test\n")))
graph.add_edge("root", "lib", Include(namespace="lib", taskfile="lib.yml"))
merged = graph.merge()
print(list(merged.tasks))   # ['build-*', 'lib:test']
```

During a merge:

- Names, dependencies, task calls and aliases in the included tasks get the
  namespace as a prefix, unless the include is flattened.
- The versions of the two Taskfiles must match.
- An included Taskfile may not declare `dotenv`.
- A name that is already taken raises `TaskNameFlattenConflictError`.

## Locating Taskfiles

`tasksmith.locate` has three functions:

- `exists(path)` returns the absolute path of a Taskfile. `path` may be the
  file itself, or a directory holding one of the default names
  (`Taskfile.yml`, `taskfile.yaml`, `Taskfile.dist.yml`, and so on).
- `exists_walk(path)` does the same, then moves up through parent
  directories. It stops at the root, or where the owner of the directory
  changes.
- `remote_exists(url, timeout)` checks a URL with HEAD requests. If the URL
  does not serve a YAML or plain-text document, it tries each default name
  beneath it.

## Watching

`tasksmith.ignore.should_ignore_file(path)` tells whether a path lies in, or
is, a `.task`, `.git`, `.hg` or `node_modules` directory.

## Errors

Errors about Taskfiles subclass `tasksmith.errors.TaskfileError`. These
include `TaskfileDecodeError`, `TaskfileNotFoundError`,
`TaskfileFetchFailedError`, `TaskfileNetworkTimeoutError`, `TaskfileCycleError`
and `TaskNameFlattenConflictError`.

Other exceptions pass through unchanged:

- Malformed YAML raises `yaml.YAMLError`.
- A missing path given to `exists` raises `OSError`.
- `TaskfileGraph.add_edge` raises `KeyError` for a URI that has no vertex.

## What it does not do

tasksmith has no command-line program and does not run tasks. It also has no
reader that loads Taskfiles from files, standard input, HTTP or Git and
follows their `includes` on its own. You decode each Taskfile yourself and
add it to a `TaskfileGraph`. Nothing is downloaded, cached or checksummed
apart from the HEAD requests made by `remote_exists`.