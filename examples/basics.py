from reactive_lens import MISSING, Store, history, lenses

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Creating a store")
print("-" * 100)
print()

# A store holds one immutable value. Read it with get(), replace it with set().
store = Store.init({"name": "Alice", "age": 30, "tags": ["admin"]})
print(store.get())

# You can register listeners that run on every change. on() returns the unsubscribe function.
off = store.on(lambda state: print(f"State changed: {state}"))
store.set({"name": "Bob", "age": 31, "tags": []})  # This will trigger the listener

off()
store.set({"name": "Carol", "age": 32, "tags": []})  # This will not trigger the listener

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Zooming into parts of the state")
print("-" * 100)
print()

# at() makes a substore for one key. Writes go through to the root value.
name = store.at("name")
name.on(lambda n: print(f"Name changed to: {n}"))
name.set("Dave")
print(store.get())

# modify() applies a function to the current value.
store.at("age").modify(lambda age: age + 1)

# pick() makes a substore of several keys at once.
print(store.pick("name", "age").get())

# key() addresses a key that may be missing; setting MISSING removes it.
nickname = store.zoom(lenses.key("nickname"))
print(f"nickname: {nickname.get()}")
nickname.set("D")
nickname.set(MISSING)

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Batching writes")
print("-" * 100)
print()

# Inside a transaction, listeners only run once at the end, with the final value.
store.disconnect()
store.on(lambda state: print(f"One notification: {state}"))
store.transaction(lambda: (store.at("name").set("Eve"), store.at("age").set(40)))

# update() writes several keys in one transaction.
store.update(name="Frank", age=41)

# The same thing as a with block.
with store.batch():
    store.at("name").set("Grace")
    store.at("age").set(42)

# Store.arr() runs a mutating list method on a copy of the list.
Store.arr(store.at("tags"), "append")("editor")

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Undo and redo")
print("-" * 100)
print()

# Keep the state in a history zipper and zoom on the present moment.
doc = Store.init(history.init({"title": "Draft", "body": ""}))
now = doc.zoom(history.now())
now.on(lambda state: print(f"Document: {state}"))

doc.modify(history.advance_to({"title": "Final", "body": "Hello"}))
doc.modify(history.undo)
doc.modify(history.redo)
