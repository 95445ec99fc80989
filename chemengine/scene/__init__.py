"""Scene components: entity names and parent/child hierarchy markers."""