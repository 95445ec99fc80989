"""Window creation settings and runtime window state."""