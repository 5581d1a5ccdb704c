# Runtime modules - depend on kernel, never on the public SSet handle
