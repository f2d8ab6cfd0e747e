# assetkit

Read external resources by a dotted id, whatever they are stored in.

An asset id such as `common.position` names the file `common/position.<ext>`
below a root. The same id can be read from a directory on disk, from a zip
archive, or from data held in memory, so code that uses assets does not need
to know where they come from.

## Installing

```
pip install assetkit
```

## Sources

Every source derives from `assetkit.entry.Source` and offers:

- `read(id, ext)` returns the bytes of a file and raises an `OSError`
  (`FileNotFoundError` when it is missing);
- `read_dir(id)` returns the entries of a directory as `DirEntry` values, and
  raises `FileNotFoundError` when there is no such directory;
- `exists(entry)` tells whether a file or directory entry exists.

A `DirEntry` is made with `DirEntry.file(id, ext)` or
`DirEntry.directory(id)`. `is_file()` and `is_dir()` tell them apart, and
`parent_id()` gives the id of the directory holding the entry, or `None` for
the root (`""`).

The built-in sources are:

- `assetkit.filesystem.FileSystem(path)` – a directory on disk. The path must
  be a readable directory; `root` is its absolute path and `path_of(entry)`
  gives the path an entry would have. It supports hot-reloading (see below).
- `assetkit.zipsource.Zip` – a zip archive, created with `Zip.open(path)`,
  `Zip.from_bytes(data)` or `Zip.from_reader(reader)`. An invalid archive
  raises `OSError`. Members with unsupported paths are skipped with a logged
  warning. `close()` releases the archive, and a `Zip` can be used in a
  `with` block.
- `assetkit.embedded.Embedded` – files held in memory, built from mappings
  (`Embedded(files={("id", "ext"): b"..."}, dirs={"": [...]})`) or from a
  `RawEmbedded` description with `Embedded.from_raw(raw)`.
- `assetkit.entry.Empty` – a source that holds nothing.

```python
from assetkit.entry import DirEntry
from assetkit.filesystem import FileSystem

fs = FileSystem("assets")

content = fs.read("common.position", "ron")
print(fs.exists(DirEntry.file("common.position", "ron")))

for entry in fs.read_dir("example.monsters"):
    if entry.is_file():
        print(entry.id, entry.ext)
```

`assetkit.paths.path_of_entry(root, entry)` and `extension_of(path)` do the
mapping between ids and paths on their own.

## Loaders

`assetkit.loader` holds loaders that turn raw bytes into values. Each has a
`load(content, ext)` method and raises `LoadError` (a `ValueError`, whose
`reason` is the underlying error) when the content cannot be converted.

| Loader                       | Result                                           |
|------------------------------|--------------------------------------------------|
| `BytesLoader()`              | the bytes unchanged                              |
| `StringLoader()`             | text decoded as UTF-8, not trimmed               |
| `ParseLoader(parse)`         | `parse` applied to the trimmed UTF-8 text        |
| `LoadFrom(convert, loader)`  | `convert` applied to another loader's result     |
| `JsonLoader(into=None)`      | a JSON document                                  |
| `TomlLoader(into=None)`      | a TOML document                                  |
| `YamlLoader(into=None)`      | a YAML document                                  |
| `MessagePackLoader(into=None)` | MessagePack data                               |
| `CborLoader(into=None)`      | CBOR data                                        |

For the format loaders, `into`, when given, builds the final value from the
decoded data.

```python
from assetkit.loader import JsonLoader, LoadFrom, ParseLoader, StringLoader

text = StringLoader().load(b"Hello World!", "")
number = ParseLoader(int).load(b" 42\n", "x")
point = JsonLoader(into=lambda d: (d["x"], d["y"])).load(b'{"x": 5, "y": -6}', "json")
doubled = LoadFrom(lambda n: n * 2, ParseLoader(int)).load(b"21", "")
```

## Keys

`assetkit.key.AssetType.of(cls)` identifies an asset class; its `extensions`
come from the class's `EXTENSIONS` sequence or `EXTENSION` string.
`AssetKey.new(cls, id)` pairs such a type with an id.

## Hot-reloading

`assetkit.hotreload.event_channel()` returns an `EventSender` and the queue it
feeds. A source that supports hot-reloading receives the sender through
`configure_hot_reloading(events)` and puts on the queue a tuple of the
`AssetKey`s of each changed asset; it returns an `UpdateSender` that must be
told, with `UpdateMessage.add_asset(key)`, `UpdateMessage.remove_asset(key)`
and `UpdateMessage.clear()`, which assets are in use. After
`EventSender.close()` the queue receives `None` and further sends raise
`Disconnected`.

```python
from assetkit.filesystem import FileSystem
from assetkit.hotreload import UpdateMessage, event_channel
from assetkit.key import AssetKey

class Position:
    EXTENSION = "ron"

fs = FileSystem("assets")
events, changed = event_channel()
updates = fs.configure_hot_reloading(events)
updates.send_update(UpdateMessage.add_asset(AssetKey.new(Position, "common.position")))

# after assets/common/position.ron is edited:
keys = changed.get()
updates.close()
```

For file-based sources, `assetkit.watcher.FsWatcherBuilder` does this work:
`watch(path)` adds a directory to watch recursively and `build(events)` starts
a background thread and returns a `QueueUpdateSender`; closing it stops the
watcher. `WatchedPaths` is the mapping from paths to asset keys it keeps.

`assetkit.dependencies.Dependencies` records, with
`insert(key, deps, reload)`, which assets each asset is built from.
`AssetDepGraph(dependencies, changed_keys)` collects everything that depends
on the changed assets, and `update(dependencies, cache)` calls each `reload`
function with `(cache, id)`, dependencies first, recording the new
dependencies it returns.

## What this package does not do

There is no asset cache: nothing here stores loaded values, hands out shared
handles to them, or applies reloaded values anywhere. A program that wants
that keeps its own store, chooses a loader per asset type, and uses the
hot-reloading pieces above to learn which entries to reload and in what order.