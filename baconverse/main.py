import io, base64, json, hashlib, math, threading
from typing import Optional

import networkx as nx
import matplotlib.pyplot as plt
from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from baconverse import config, graph_lib
from baconverse.cast_network import load_cast_network
from baconverse.game_logic import CenterSession
from baconverse.graph import StartNotFoundError, UnreachableVertexError, VertexNotFoundError

app = FastAPI(
    title="Baconverse API",
    description="Degrees of separation between actors through shared movies.",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ---------- CORS ----------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------- Session globals ----------
SESSION: Optional[CenterSession] = None
SESSION_READY = False
NETWORK_CHECKSUM = ""
# change_center swaps the spanning tree; reads must not interleave with it
SESSION_LOCK = threading.Lock()

# ---------- Utilities ----------
def compute_network_fingerprint(graph) -> str:
    G = graph.as_networkx()
    nodes = sorted(str(n) for n in G.nodes())
    edges = sorted(
        f"{u}->{v}|{','.join(sorted(d['label']))}" for u, v, d in G.edges(data=True) if str(u) < str(v)
    )
    blob = json.dumps({"nodes": nodes, "edges": edges}, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    return hashlib.sha256(blob).hexdigest()

def average_or_none(value: float):
    return None if math.isinf(value) else value

def install_session(session: Optional[CenterSession]):
    """Serve ``session`` (or nothing, for None)."""
    global SESSION, SESSION_READY, NETWORK_CHECKSUM
    with SESSION_LOCK:
        SESSION = session
        SESSION_READY = session is not None
        NETWORK_CHECKSUM = compute_network_fingerprint(session.graph) if session is not None else ""

def load_session():
    """Build the network from the configured record files and serve it."""
    try:
        graph, default_center = load_cast_network(
            config.MOVIES_PATH, config.ACTORS_PATH, config.MOVIE_ACTORS_PATH
        )
    except OSError as e:
        print(f"[Baconverse] Record files not available: {e}")
        install_session(None)
        return

    install_session(CenterSession(graph, preferred_center=config.PREFERRED_CENTER, default_center=default_center))
    print(f"[Baconverse] Loaded network from {config.ACTORS_PATH}")
    print(f"[Baconverse] Actors={SESSION.num_vertices} | Center={SESSION.center}")

def session_not_ready_response():
    return JSONResponse(
        status_code=503,
        content={
            "error": "Network not ready",
            "message": "The actor network is still loading or its record files are missing.",
        },
    )

# ---------- Models ----------
class CenterInput(BaseModel):
    actor: str

# ---------- Helpers ----------
def render_path(graph, path_nodes):
    sub = graph.as_networkx().subgraph(path_nodes).to_undirected()
    pos = nx.spring_layout(sub, seed=42)
    plt.figure(figsize=(8, 6))
    plt.title("Baconverse – Path to Center", fontsize=12)
    node_colors = ['gold' if n == path_nodes[-1] else 'skyblue' for n in sub.nodes()]
    nx.draw(sub, pos, labels={n: str(n) for n in sub.nodes()}, node_color=node_colors, with_labels=True,
            node_size=2000, font_size=10, edge_color='gray')
    buf = io.BytesIO()
    plt.savefig(buf, format='png', bbox_inches='tight')
    plt.close()
    buf.seek(0)
    return base64.b64encode(buf.read()).decode('utf-8')

def center_summary(session: CenterSession):
    avg = session.average_separation(session.center) if session.center is not None else math.inf
    return {
        "center": session.center,
        "reachable": session.num_reachable,
        "actors": session.num_vertices,
        "average_separation": average_or_none(avg),
    }

# ---------- Routes ----------
@app.get("/health")
def health():
    return {"ok": True, "ready": SESSION_READY, "service": "Baconverse API"}

@app.get("/meta")
def meta():
    if not SESSION_READY:
        return session_not_ready_response()
    with SESSION_LOCK:
        return {
            "ready": True,
            "actors": SESSION.num_vertices,
            "edges": SESSION.graph.num_edges() // 2,
            "center": SESSION.center,
            "reachable": SESSION.num_reachable,
            "checksum": NETWORK_CHECKSUM,
        }

@app.get("/center")
def get_center():
    if not SESSION_READY:
        return session_not_ready_response()
    with SESSION_LOCK:
        return center_summary(SESSION)

@app.post("/center")
def change_center(input: CenterInput):
    if not SESSION_READY:
        return session_not_ready_response()
    with SESSION_LOCK:
        if not SESSION.change_center(input.actor):
            raise HTTPException(status_code=404, detail="Actor not found.")
        return center_summary(SESSION)

@app.get("/centers")
def centers(count: int = Query(10)):
    if not SESSION_READY:
        return session_not_ready_response()
    with SESSION_LOCK:
        ranked = SESSION.list_by_average_separation(count)
    return {
        "order": "lowest" if count >= 0 else "highest",
        "results": [
            {"actor": a, "average_separation": average_or_none(avg), "isolated": math.isinf(avg)}
            for a, avg in ranked
        ],
    }

@app.get("/degree")
def degree(low: Optional[int] = None, high: Optional[int] = None):
    if not SESSION_READY:
        return session_not_ready_response()
    with SESSION_LOCK:
        ranked = SESSION.list_by_degree(low, high)
    return {"low": low, "high": high, "results": [{"actor": a, "degree": d} for a, d in ranked]}

@app.get("/unreachable")
def unreachable():
    if not SESSION_READY:
        return session_not_ready_response()
    with SESSION_LOCK:
        return {"center": SESSION.center, "results": SESSION.list_unreachable()}

@app.get("/path")
def path(actor: str = Query(..., min_length=1), render: bool = False):
    if not SESSION_READY:
        return session_not_ready_response()
    with SESSION_LOCK:
        try:
            steps = SESSION.connections_to_center(actor)
        except VertexNotFoundError:
            raise HTTPException(status_code=404, detail="Actor not found.")
        except UnreachableVertexError:
            raise HTTPException(status_code=409, detail=f"This actor is not connected to {SESSION.center}.")
        nodes = [actor] + [b for _, _, b in steps]
        image_data = render_path(SESSION.graph, nodes) if render else None
        center = SESSION.center
    return {
        "actor": actor,
        "center": center,
        "separation": len(steps),
        "path": nodes,
        "steps": [{"actor": a, "movies": sorted(movies), "with": b} for a, movies, b in steps],
        "graph_image_base64": image_data,
    }

@app.get("/separation")
def separation(low: Optional[int] = None, high: Optional[int] = None):
    if not SESSION_READY:
        return session_not_ready_response()
    with SESSION_LOCK:
        ranked = SESSION.list_by_separation(low, high)
        center = SESSION.center
    return {"center": center, "low": low, "high": high,
            "results": [{"actor": a, "separation": d} for a, d in ranked]}

@app.get("/average_separation")
def average_separation(actor: str = Query(..., min_length=1)):
    if not SESSION_READY:
        return session_not_ready_response()
    try:
        avg = SESSION.average_separation(actor)
    except VertexNotFoundError:
        raise HTTPException(status_code=404, detail="Actor not found.")
    return {"actor": actor, "average_separation": average_or_none(avg), "isolated": math.isinf(avg)}

@app.get("/random_walk")
def random_walk(actor: str = Query(..., min_length=1), steps: int = Query(6, ge=0, le=1000)):
    if not SESSION_READY:
        return session_not_ready_response()
    try:
        walk = graph_lib.random_walk(SESSION.graph, actor, steps)
    except StartNotFoundError:
        raise HTTPException(status_code=404, detail="Actor not found.")
    return {"actor": actor, "steps": steps, "walk": walk}

# ---------- Initialize ----------
try:
    load_session()
except Exception as e:
    print(f"[Baconverse] Startup: could not load network ({e})")
    SESSION_READY = False
